"""Scoring Pydantic schemas."""
from typing import List, Optional
from uuid import UUID

from party_backend.schemas.base import BaseSchema
from party_backend.schemas.party import SongResponse


class SongScoreResponse(BaseSchema):
    """Score breakdown for a single song."""
    song_id: UUID
    raw_average: float
    weight_multiplier: float
    weighted_score: float
    confidence_modifier: float
    theme_bonus: float
    final_score: float
    vote_count: int
    vote_distribution: List[int]


class PlayerScoreResponse(BaseSchema):
    """Total score of one player in a party."""
    party_id: UUID
    player_id: UUID
    total_score: float


class BonusCategoryResponse(BaseSchema):
    """A finale award players can win."""
    category_id: str
    name: str
    icon: str
    description: str
    points: int


class BonusResultResponse(BaseSchema):
    """A bonus category awarded to one song."""
    category_id: str
    category_name: str
    winning_song_id: UUID
    winner_player_id: UUID
    points: int
    reveal_order: int


class ScoreBreakdownResponse(BaseSchema):
    """Where a player's final score comes from."""
    base_score: float
    round_multiplier: float
    confidence_modifier: float
    bonus_points: int
    theme_bonus: float
    final_score: float


class FinalStandingResponse(BaseSchema):
    """One row of the finale leaderboard."""
    rank: int
    player_id: UUID
    alias: str
    real_name: str
    songs: List[SongResponse]
    total_base_score: float
    confidence_modifiers: float
    bonus_points: int
    final_score: float
    score_breakdown: ScoreBreakdownResponse
    bonus_categories: List[str]
    highest_song: Optional[SongResponse]
    lowest_song: Optional[SongResponse]
