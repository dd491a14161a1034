"""Pydantic models for food detection responses."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from food_detection.domain.detection import DetectedItem, DetectionResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BoundingBoxPayload(_CamelModel):
    """Bounding box as returned to clients."""

    x: float
    y: float
    width: float
    height: float


class DetectedItemPayload(_CamelModel):
    """Detected food item payload."""

    name: str
    quantity: int
    category: str
    confidence: int
    bbox: BoundingBoxPayload
    original_label: str

    @classmethod
    def from_item(cls, item: DetectedItem) -> "DetectedItemPayload":
        """Build the payload from a domain item."""
        return cls(
            name=item.name,
            quantity=item.quantity,
            category=item.category.value,
            confidence=item.confidence,
            bbox=BoundingBoxPayload(
                x=item.bbox.x,
                y=item.bbox.y,
                width=item.bbox.width,
                height=item.bbox.height,
            ),
            original_label=item.original_label,
        )


class ImageSizePayload(_CamelModel):
    """Image dimensions used for quantity estimation."""

    width: int
    height: int


class DetectFoodResponse(_CamelModel):
    """Successful detection response envelope."""

    success: bool = True
    items: list[DetectedItemPayload]
    image_size: ImageSizePayload
    detected_count: int

    @classmethod
    def from_result(cls, result: DetectionResult) -> "DetectFoodResponse":
        """Build the response envelope from a detection result."""
        return cls(
            items=[DetectedItemPayload.from_item(item) for item in result.items],
            image_size=ImageSizePayload(
                width=result.image_width, height=result.image_height
            ),
            detected_count=result.detected_count,
        )


class ErrorResponse(_CamelModel):
    """Failure envelope."""

    success: bool = False
    error: str
    code: str | None = None
    details: str | None = None
    message: str | None = None
