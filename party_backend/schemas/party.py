"""Party, player and song Pydantic schemas."""
from pydantic import BaseModel, ConfigDict, Field

from typing import Literal, Optional, List
from uuid import UUID

from party_backend.utils.model_registry import PartyStatus, PlayerStatus
from party_backend.schemas.base import BaseSchema, UtcDatetime


class PartySettings(BaseModel):
    """Typed party configuration stored alongside the party row."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    songs_per_player: int = Field(default=2, ge=1, le=3, alias="songsPerPlayer")
    play_duration: Literal[30, 45, 60, 90] = Field(default=45, alias="playDuration")
    submission_timer_minutes: Optional[int] = Field(default=None, ge=1, alias="submissionTimerMinutes")
    enable_confidence_betting: bool = Field(default=True, alias="enableConfidenceBetting")
    enable_progressive_weighting: bool = Field(default=True, alias="enableProgressiveWeighting")
    bonus_category_count: int = Field(default=2, ge=0, le=3, alias="bonusCategoryCount")


DEFAULT_PARTY_SETTINGS = PartySettings()


# Response schemas
class PartyResponse(BaseSchema):
    """Party information."""
    party_id: UUID
    code: str
    status: PartyStatus
    is_demo_mode: bool
    host_id: UUID
    settings: PartySettings
    created_at: UtcDatetime
    started_at: Optional[UtcDatetime]
    completed_at: Optional[UtcDatetime]


class PlayerResponse(BaseSchema):
    """Player information."""
    player_id: UUID
    party_id: UUID
    name: str
    status: PlayerStatus
    is_host: bool
    joined_at: UtcDatetime


class SongResponse(BaseSchema):
    """Submitted song information."""
    song_id: UUID
    party_id: UUID
    round_id: Optional[UUID]
    round_number: int
    submitter_id: UUID
    confidence: int
    track_id: int
    title: str
    artist: str
    duration_ms: int
    final_score: Optional[float]


class VoteResponse(BaseSchema):
    """Vote information."""
    vote_id: UUID
    song_id: UUID
    voter_id: UUID
    rating: int
    theme_adherence_rating: Optional[int]
    is_super_vote: bool
    is_locked: bool
    voted_at: UtcDatetime


class AdvancePartyResponse(BaseSchema):
    """Result of a lifecycle transition."""
    party_id: UUID
    status: PartyStatus


class DemoPartyResponse(BaseSchema):
    """Demo party with its simulated players."""
    party: PartyResponse
    players: List[PlayerResponse]


class DemoSongsResponse(BaseSchema):
    """Songs auto-submitted for a demo party."""
    party_id: UUID
    songs: List[SongResponse]


class SimulateVotingRequest(BaseModel):
    """Request to simulate votes on a song."""
    voter_ids: List[UUID] = Field(..., min_length=1, description="Candidate voters, submitter included or not")
    seed: Optional[int] = Field(default=None, description="Seed for a reproducible simulation")


class SimulateVotingResponse(BaseSchema):
    """Votes produced by a simulation run."""
    song_id: UUID
    votes: List[VoteResponse]


class DemoTimingResponse(BaseSchema):
    """Effective timing for a party."""
    party_id: UUID
    play_duration_seconds: int
    finale_animation_speed: float


class CastVoteRequest(BaseModel):
    """Request to cast a vote on a song."""
    voter_id: UUID
    rating: int = Field(..., description="Rating from 1 to 10")
    super_vote: bool = Field(default=False, description="Count this vote 1.5x in the song average")


class DemoTrackResponse(BaseSchema):
    """Curated demo playlist entry."""
    track_id: int
    title: str
    artist: str
    artwork_url: str
    duration_ms: int
    permalink_url: str
    expected_score: float


class VoterPersonalityResponse(BaseSchema):
    """Simulated voter archetype."""
    name: str
    bias: str
    mean_rating: float
    variance: float
