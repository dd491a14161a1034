"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from food_detection.adapters.roboflow_client import HttpxRoboflowClient
from food_detection.config import Settings
from food_detection.services.detection import DetectionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    detection_service: DetectionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    roboflow_client = HttpxRoboflowClient.create(
        api_key=resolved_settings.roboflow_api_key,
        model=resolved_settings.roboflow_model,
        base_url=resolved_settings.roboflow_base_url,
        timeout_seconds=resolved_settings.detection_timeout_seconds,
    )
    detection_service = DetectionService(client=roboflow_client)

    async def close_resources() -> None:
        await roboflow_client.close()

    return AppContainer(
        settings=resolved_settings,
        detection_service=detection_service,
        close_resources=close_resources,
    )
