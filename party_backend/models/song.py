"""Song model."""
from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
)
from datetime import datetime, UTC
import uuid

from party_backend.database import Base
from party_backend.models.base import get_uuid_column


class Song(Base):
    """A track submitted by a player, with its computed score columns."""
    __tablename__ = "songs"

    song_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
    party_id = get_uuid_column(
        ForeignKey("parties.party_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    round_id = get_uuid_column(
        ForeignKey("rounds.round_id", ondelete="SET NULL"),
        nullable=True,
    )
    submitter_id = get_uuid_column(
        ForeignKey("players.player_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    round_number = Column(Integer, nullable=False, default=1)
    confidence = Column(Integer, nullable=False)  # 1-5 wager

    # Track metadata
    track_id = Column(Integer, nullable=False)
    title = Column(String(255), nullable=False)
    artist = Column(String(255), nullable=False)
    duration_ms = Column(Integer, nullable=False)
    artwork_url = Column(String(512), nullable=True)
    permalink_url = Column(String(512), nullable=True)

    # Computed scores (null until scored)
    raw_average = Column(Float, nullable=True)
    weighted_score = Column(Float, nullable=True)
    confidence_modifier = Column(Float, nullable=True)
    theme_bonus = Column(Float, nullable=True)
    final_score = Column(Float, nullable=True)
    vote_distribution = Column(JSON, nullable=True)

    submitted_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))

    def __repr__(self):
        return f"<Song(id={self.song_id}, title={self.title}, submitter_id={self.submitter_id}, confidence={self.confidence})>"
