"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from food_detection.config import Settings
from food_detection.containers import AppContainer
from food_detection.domain.detection import ProviderResult
from food_detection.services.detection import DetectionClient, DetectionService

BOUNDARY = "----FoodDetectionBoundary7MA4YWxk"

# JPEG header followed by bytes that are not valid UTF-8.
JPEG_BYTES = (
    b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x80\x81\xfe\xff\r\n-\x00\xc3\x28\xff\xd9"
)


def build_multipart(
    parts: list[tuple[str, bytes, str | None]], boundary: str = BOUNDARY
) -> bytes:
    """Build a multipart/form-data body from (name, content, filename) parts."""
    chunks: list[bytes] = []
    for name, content, filename in parts:
        disposition = f'form-data; name="{name}"'
        if filename is not None:
            disposition += f'; filename="{filename}"'
        chunks.append(f"--{boundary}\r\n".encode())
        chunks.append(f"Content-Disposition: {disposition}\r\n".encode())
        if filename is not None:
            chunks.append(b"Content-Type: image/jpeg\r\n")
        chunks.append(b"\r\n")
        chunks.append(content)
        chunks.append(b"\r\n")
    chunks.append(f"--{boundary}--\r\n".encode())
    return b"".join(chunks)


def multipart_content_type(boundary: str = BOUNDARY) -> str:
    return f"multipart/form-data; boundary={boundary}"


@dataclass
class FakeDetectionClient(DetectionClient):
    """Fake detection client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "predictions": [
                {
                    "class": "red_apple",
                    "confidence": 0.9,
                    "x": 100,
                    "y": 100,
                    "width": 50,
                    "height": 50,
                }
            ],
            "image": {"width": 640, "height": 640},
        }
    )
    error: Exception | None = None
    calls: list[bytes] = field(default_factory=list)

    async def predict(self, image_bytes: bytes) -> ProviderResult:
        self.calls.append(image_bytes)
        if self.error is not None:
            raise self.error
        return ProviderResult.model_validate(self.payload)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        roboflow_api_key="roboflow-key",
        roboflow_model="food-detection-test/1",
        roboflow_base_url="https://detect.test",
        environment="production",
    )


@pytest.fixture
def detection_client() -> FakeDetectionClient:
    return FakeDetectionClient()


@pytest.fixture
def container(
    settings: Settings, detection_client: FakeDetectionClient
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        detection_service=DetectionService(client=detection_client),
        close_resources=close_resources,
    )
