"""Round model."""
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


class Round(Base):
    """A scored segment of a party, optionally carrying a round theme."""
    __tablename__ = "rounds"

    round_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
    party_id = get_uuid_column(
        ForeignKey("parties.party_id", ondelete="CASCADE"),
        nullable=False,
    )
    round_number = Column(Integer, nullable=False)

    # Predefined theme slug or custom theme id; resolved catalog-first
    theme_id = Column(String(64), nullable=True)

    __table_args__ = (
        UniqueConstraint("party_id", "round_number", name="uq_rounds_party_round_number"),
    )

    def __repr__(self):
        return f"<Round(id={self.round_id}, party_id={self.party_id}, number={self.round_number}, theme={self.theme_id})>"
