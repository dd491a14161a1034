"""Food detection domain models."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_IMAGE_SIZE = 640


class FoodCategory(str, Enum):
    """Food categories assigned to detected labels."""

    VEGETABLES = "Vegetables"
    FRUITS = "Fruits"
    MEAT_AND_FISH = "Meat & Fish"
    DAIRY = "Dairy"
    GRAINS = "Grains"
    BEVERAGES = "Beverages"
    COOKED_FOOD = "Cooked Food"
    OTHER = "Other"


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in pixel units, centred on ``x``/``y``."""

    x: float
    y: float
    width: float
    height: float


class ProviderPrediction(BaseModel):
    """Single raw prediction returned by the detection provider."""

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", allow_inf_nan=False
    )

    label: str = Field(alias="class")
    confidence: float = Field(ge=0.0, le=1.0)
    x: float
    y: float
    width: float
    height: float

    @property
    def bbox(self) -> BoundingBox:
        """Return the prediction's bounding box."""
        return BoundingBox(x=self.x, y=self.y, width=self.width, height=self.height)


class ProviderImage(BaseModel):
    """Image dimensions reported by the provider."""

    model_config = ConfigDict(extra="ignore")

    width: int | None = None
    height: int | None = None


class ProviderResult(BaseModel):
    """Validated provider response."""

    model_config = ConfigDict(extra="ignore")

    predictions: list[ProviderPrediction] = Field(default_factory=list)
    image: ProviderImage | None = None

    @field_validator("predictions", mode="before")
    @classmethod
    def null_predictions_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def image_width(self) -> int:
        """Image width, falling back to the provider's canonical resize."""
        if self.image and self.image.width:
            return self.image.width
        return DEFAULT_IMAGE_SIZE

    @property
    def image_height(self) -> int:
        """Image height, falling back to the provider's canonical resize."""
        if self.image and self.image.height:
            return self.image.height
        return DEFAULT_IMAGE_SIZE


@dataclass(frozen=True)
class DetectedItem:
    """Food item derived from one qualifying prediction."""

    name: str
    quantity: int
    category: FoodCategory
    confidence: int
    bbox: BoundingBox
    original_label: str


@dataclass(frozen=True)
class DetectionResult:
    """Assembled detection output for one image."""

    items: tuple[DetectedItem, ...]
    image_width: int
    image_height: int

    @property
    def detected_count(self) -> int:
        """Number of items kept after filtering."""
        return len(self.items)
