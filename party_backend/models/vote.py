"""Vote model."""
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
)
from datetime import datetime, UTC
import uuid

from party_backend.database import Base
from party_backend.models.base import get_uuid_column


class Vote(Base):
    """A player's rating of another player's song."""
    __tablename__ = "votes"

    vote_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
    song_id = get_uuid_column(
        ForeignKey("songs.song_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    voter_id = get_uuid_column(
        ForeignKey("players.player_id", ondelete="CASCADE"),
        nullable=False,
    )

    rating = Column(Integer, nullable=False)  # 1-10
    theme_adherence_rating = Column(Integer, nullable=True)  # 1-5, null when not rated
    is_super_vote = Column(Boolean, nullable=False, default=False)  # Counts 1.5x in the average
    is_locked = Column(Boolean, nullable=False, default=False)

    voted_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    locked_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("song_id", "voter_id", name="uq_votes_song_voter"),
    )

    def __repr__(self):
        return f"<Vote(id={self.vote_id}, song_id={self.song_id}, voter_id={self.voter_id}, rating={self.rating})>"
