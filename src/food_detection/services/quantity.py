"""Portion size heuristic based on bounding box area."""

import math

from food_detection.domain.detection import BoundingBox

MIN_QUANTITY_G = 50
MAX_QUANTITY_G = 500
AREA_MULTIPLIER = 5


def estimate_quantity(
    bbox: BoundingBox, image_width: float, image_height: float
) -> int:
    """Estimate grams from the share of the image the box covers.

    The result is always an integer in ``[MIN_QUANTITY_G, MAX_QUANTITY_G]``
    and never decreases as the box grows. With ``AREA_MULTIPLIER`` the upper
    bound is reached once the box covers a fifth of the image.
    """
    if image_width <= 0 or image_height <= 0:
        return MIN_QUANTITY_G
    relative_area = (bbox.width / image_width) * (bbox.height / image_height)
    quantity = MIN_QUANTITY_G + relative_area * (
        MAX_QUANTITY_G - MIN_QUANTITY_G
    ) * AREA_MULTIPLIER
    clamped = min(MAX_QUANTITY_G, max(MIN_QUANTITY_G, quantity))
    # Halves round up.
    return math.floor(clamped + 0.5)
