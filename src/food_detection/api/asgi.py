"""ASGI entrypoint for the food detection API."""

from food_detection.api.app import create_app
from food_detection.containers import build_container

app = create_app(build_container())
