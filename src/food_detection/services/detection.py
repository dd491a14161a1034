"""Food detection service: provider call plus result assembly."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from food_detection.domain.detection import (
    DetectedItem,
    DetectionResult,
    FoodCategory,
    ProviderPrediction,
    ProviderResult,
)
from food_detection.services.classification import categorize
from food_detection.services.quantity import estimate_quantity

MIN_CONFIDENCE = 0.3

_logger = logging.getLogger(__name__)


class DetectionClient(Protocol):
    """Interface for the external object-detection provider."""

    async def predict(self, image_bytes: bytes) -> ProviderResult:
        """Return validated raw predictions for an image."""


@dataclass
class DetectionService:
    """Service that runs detection and turns predictions into food items."""

    client: DetectionClient

    async def detect(self, image_bytes: bytes) -> DetectionResult:
        """Detect food items in an image."""
        return self.assemble(await self.predict(image_bytes))

    async def predict(self, image_bytes: bytes) -> ProviderResult:
        """Run the provider call for an image."""
        return await self.client.predict(image_bytes)

    def assemble(self, raw: ProviderResult) -> DetectionResult:
        """Build the detection result from raw provider output."""
        items = assemble_items(raw.predictions, raw.image_width, raw.image_height)
        _logger.info("Kept %s of %s predictions", len(items), len(raw.predictions))
        return DetectionResult(
            items=tuple(items),
            image_width=raw.image_width,
            image_height=raw.image_height,
        )


def assemble_items(
    predictions: Iterable[ProviderPrediction], image_width: int, image_height: int
) -> list[DetectedItem]:
    """Filter predictions to recognised foods and build output items.

    Order follows the input; predictions categorised as ``Other`` or with
    confidence at or below ``MIN_CONFIDENCE`` are dropped.
    """
    items: list[DetectedItem] = []
    for prediction in predictions:
        category = categorize(prediction.label)
        if category is FoodCategory.OTHER or prediction.confidence <= MIN_CONFIDENCE:
            continue
        bbox = prediction.bbox
        items.append(
            DetectedItem(
                name=format_food_name(prediction.label),
                quantity=estimate_quantity(bbox, image_width, image_height),
                category=category,
                confidence=_to_percent(prediction.confidence),
                bbox=bbox,
                original_label=prediction.label,
            )
        )
    return items


def format_food_name(label: str) -> str:
    """Turn ``red_apple`` into ``Red Apple``."""
    return " ".join(
        segment[:1].upper() + segment[1:].lower() for segment in label.split("_")
    )


def _to_percent(confidence: float) -> int:
    # Halves round up.
    return int(confidence * 100 + 0.5)
