"""
Pydantic schemas for renovation configs, analyses and generation jobs
"""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

MAX_COLORS = 3


class RenovatorStyle(str, Enum):
    MODERN = "Modern"
    SCANDINAVIAN = "Scandinavian"
    INDUSTRIAL = "Industrial"
    CLASSIC = "Classic"
    MINIMALIST = "Minimalist"
    BOHEMIAN = "Bohemian"
    LUXURY = "Luxury"
    NEOCLASSIC = "Neoclassic"
    ART_DECO = "Art Deco"
    MEDITERRANEAN = "Mediterranean"
    JAPANDI = "Japandi"
    CYBERPUNK = "Cyberpunk"
    FARMHOUSE = "Farmhouse"
    BAROQUE = "Baroque"
    STEAMPUNK = "Steampunk"
    GOTHIC = "Gothic"
    COASTAL = "Coastal"
    RUSTIC = "Rustic"


class RoomType(str, Enum):
    LIVING_ROOM = "Living Room"
    BEDROOM = "Bedroom"
    KITCHEN = "Kitchen"
    BATHROOM = "Bathroom"
    HALLWAY = "Hallway"
    OFFICE = "Office"
    BALCONY = "Balcony"
    DINING_ROOM = "Dining Room"
    GAMING_ROOM = "Gaming Room"
    HOME_GYM = "Home Gym"
    LIBRARY = "Library"
    HOME_THEATER = "Home Theater"
    ATTIC = "Attic"
    BASEMENT = "Basement"
    WALK_IN_CLOSET = "Walk-in Closet"
    OTHER = "Other"


class FlooringType(str, Enum):
    HARDWOOD = "Hardwood"
    LAMINATE = "Laminate"
    TILE = "Tile"
    MARBLE = "Marble"
    CARPET = "Carpet"
    CONCRETE = "Concrete"
    EPOXY = "Epoxy"
    STONE = "Stone"


class ImageSize(str, Enum):
    """Output resolution tier"""

    ONE_K = "1K"
    TWO_K = "2K"
    FOUR_K = "4K"


class DifficultyLevel(str, Enum):
    EASY = "Asan"
    MEDIUM = "Orta"
    HARD = "Çətin"


class RoomDimensions(BaseModel):
    """Room size in metres, kept as strings the way the user typed them"""

    width: Optional[str] = None
    length: Optional[str] = None
    area: Optional[str] = None

    def with_value(self, key: str, value: str) -> "RoomDimensions":
        """Set one field; editing width or length re-derives the area when both are numeric"""
        if key not in ("width", "length", "area"):
            raise ValueError(f"Unknown dimension: {key}")

        updated = self.model_copy(update={key: value})
        if key != "area" and updated.width and updated.length:
            try:
                width = float(updated.width)
                length = float(updated.length)
            except ValueError:
                return updated
            updated = updated.model_copy(update={"area": f"{width * length:.1f}"})
        return updated


class RenovationConfig(BaseModel):
    """User-chosen renovation parameters"""

    style: RenovatorStyle = RenovatorStyle.MODERN
    room_type: RoomType = RoomType.LIVING_ROOM
    custom_room_type: Optional[str] = Field(None, max_length=100)
    color_preference: List[str] = Field(default_factory=list, max_length=MAX_COLORS)
    flooring: FlooringType = FlooringType.LAMINATE
    size: ImageSize = ImageSize.ONE_K
    selected_furniture: List[str] = Field(default_factory=list)
    country: str = "Azerbaijan"
    include_blueprint: bool = False
    dimensions: Optional[RoomDimensions] = None

    @field_validator("color_preference", "selected_furniture", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        if value is None:
            return []
        return value

    @field_validator("color_preference", "selected_furniture")
    @classmethod
    def _dedupe(cls, value: List[str]) -> List[str]:
        seen = []
        for item in value:
            if item not in seen:
                seen.append(item)
        return seen

    def room_description(self) -> str:
        """Free-text room type when 'Other' is chosen with a custom name, else the room type"""
        if self.room_type == RoomType.OTHER and self.custom_room_type:
            return self.custom_room_type
        return self.room_type.value

    def toggle_color(self, color: str) -> "RenovationConfig":
        """Add or remove a colour; adding a fourth colour is a no-op"""
        current = list(self.color_preference)
        if color in current:
            current.remove(color)
        elif len(current) >= MAX_COLORS:
            return self
        else:
            current.append(color)
        return self.model_copy(update={"color_preference": current})

    def toggle_furniture(self, item: str) -> "RenovationConfig":
        current = list(self.selected_furniture)
        if item in current:
            current.remove(item)
        else:
            current.append(item)
        return self.model_copy(update={"selected_furniture": current})

    def apply_preset(self, style: str, colors: List[str], flooring: str) -> "RenovationConfig":
        return self.model_copy(
            update={
                "style": RenovatorStyle(style),
                "color_preference": list(colors)[:MAX_COLORS],
                "flooring": FlooringType(flooring),
            }
        )

    def with_dimension(self, key: str, value: str) -> "RenovationConfig":
        dimensions = self.dimensions or RoomDimensions()
        return self.model_copy(update={"dimensions": dimensions.with_value(key, value)})

    def reset_selections(self) -> "RenovationConfig":
        return self.model_copy(update={"selected_furniture": [], "color_preference": []})


def _alias(snake: str, camel: str):
    return Field(default_factory=list, validation_alias=AliasChoices(snake, camel))


class RenovationAnalysis(BaseModel):
    """Budget, difficulty and materials plan for a before/after pair.

    Accepts both snake_case and the camelCase keys the model is prompted to
    return.
    """

    estimated_budget_range: str = Field(
        ..., validation_alias=AliasChoices("estimated_budget_range", "estimatedBudgetRange")
    )
    difficulty_level: DifficultyLevel = Field(
        DifficultyLevel.MEDIUM, validation_alias=AliasChoices("difficulty_level", "difficultyLevel")
    )
    materials: List[str] = Field(default_factory=list)
    furniture_to_buy: List[str] = _alias("furniture_to_buy", "furnitureToBuy")
    design_tips: List[str] = _alias("design_tips", "designTips")
    steps: List[str] = Field(default_factory=list)
    # True when the backend could not produce a plan and the generic one was substituted
    is_fallback: bool = Field(False, validation_alias=AliasChoices("is_fallback", "isFallback"))


# Request schemas
class GenerateRenovationRequest(BaseModel):
    image: str = Field(..., min_length=1, description="Room photo as a data URL, raw base64 or a saved project URL")
    config: RenovationConfig = Field(default_factory=RenovationConfig)


class MagicEditRequest(BaseModel):
    image: str = Field(..., min_length=1, description="Previously generated image, inline or a saved project URL")
    mask: str = Field(..., min_length=1, description="Mask or painted overlay; painted pixels are editable")
    prompt: str = Field(..., min_length=1, max_length=2000)


class AnalyzeRenovationRequest(BaseModel):
    original_image: str = Field(..., min_length=1)
    generated_image: str = Field(..., min_length=1)
    config: RenovationConfig = Field(default_factory=RenovationConfig)


class AspectRatioRequest(BaseModel):
    image: str = Field(..., min_length=1)


# Response schemas
class AspectRatioResponse(BaseModel):
    aspect_ratio: str
    width: Optional[int] = None
    height: Optional[int] = None


class RenovationResult(BaseModel):
    generated_image: str
    analysis: Optional[RenovationAnalysis] = None


class GenerationJobResponse(BaseModel):
    """Snapshot of an in-flight or finished generation job"""

    id: str
    kind: str  # renovation or edit
    state: str  # running, succeeded, failed
    status: str  # progress phase shown to the user
    progress: float
    message: str = ""
    result: Optional[RenovationResult] = None
    error: Optional[str] = None
    created_at: datetime
    finished_at: Optional[datetime] = None
    meta: Dict[str, Any] = Field(default_factory=dict)
