"""Tests for container wiring."""

import asyncio

from food_detection.adapters.roboflow_client import HttpxRoboflowClient
from food_detection.containers import build_container


def test_build_container_wires_roboflow_client(settings) -> None:
    container = build_container(settings)

    client = container.detection_service.client
    assert isinstance(client, HttpxRoboflowClient)
    assert client.api_key == "roboflow-key"
    assert client.model == "food-detection-test/1"
    assert client.timeout_seconds == 30.0
    asyncio.run(container.close_resources())
    assert client.http_client.is_closed
