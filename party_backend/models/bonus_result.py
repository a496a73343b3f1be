"""Bonus category result model."""
from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
import uuid

from party_backend.database import Base
from party_backend.models.base import get_uuid_column


class BonusResult(Base):
    """A bonus category awarded to one song at the finale."""
    __tablename__ = "bonus_results"

    bonus_result_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
    party_id = get_uuid_column(
        ForeignKey("parties.party_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id = Column(String(32), nullable=False)
    category_name = Column(String(64), nullable=False)
    winning_song_id = get_uuid_column(
        ForeignKey("songs.song_id", ondelete="CASCADE"),
        nullable=False,
    )
    winner_player_id = get_uuid_column(
        ForeignKey("players.player_id", ondelete="CASCADE"),
        nullable=False,
    )
    points = Column(Integer, nullable=False)
    reveal_order = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("party_id", "category_id", name="uq_bonus_results_party_category"),
    )

    def __repr__(self):
        return f"<BonusResult(party_id={self.party_id}, category={self.category_id}, winner={self.winner_player_id})>"
