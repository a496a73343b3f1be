"""Theme Pydantic schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional, List
from uuid import UUID

from party_backend.schemas.base import BaseSchema


class BpmRange(BaseModel):
    """Inclusive tempo window for a theme."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float


class ThemeConstraints(BaseModel):
    """Song-selection constraints for a party theme."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    genres: Optional[List[str]] = None
    decades: Optional[List[str]] = None
    moods: Optional[List[str]] = None
    bpm_range: Optional[BpmRange] = Field(default=None, alias="bpmRange")
    explicit: Optional[bool] = None
    artist_restrictions: Optional[str] = Field(default=None, alias="artistRestrictions")


class PartyThemeResponse(BaseSchema):
    """Party-wide theme (predefined or custom)."""
    theme_id: str
    name: str
    description: str
    icon: str
    constraints: ThemeConstraints
    is_custom: bool


class RoundThemeResponse(BaseSchema):
    """Theme for a single round."""
    theme_id: str
    name: str
    prompt: str
    voting_prompt: str
    icon: str
    bonus_multiplier: float


class CreateCustomThemeRequest(BaseModel):
    """Raw constraints for a custom theme.

    Kept untyped so malformed input reaches the constraint validator and
    is reported as INVALID_CONSTRAINTS instead of a generic 422.
    """
    constraints: Dict[str, Any] = Field(default_factory=dict)


class RecordAdherenceRequest(BaseModel):
    """Theme adherence rating for a vote."""
    rating: Any = Field(..., description="Integer rating from 1 to 5")


class ThemeBonusResponse(BaseSchema):
    """Computed theme bonus for a song."""
    song_id: UUID
    theme_bonus: float


class SetThemeRequest(BaseModel):
    """Predefined or custom theme to attach."""
    theme_id: str = Field(..., min_length=1, max_length=64)
