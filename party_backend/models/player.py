"""Player model."""
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    String,
)
from datetime import datetime, UTC
import uuid

from party_backend.database import Base
from party_backend.models.base import PlayerStatus, get_uuid_column


class Player(Base):
    """A participant in exactly one party."""
    __tablename__ = "players"

    player_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
    party_id = get_uuid_column(
        ForeignKey("parties.party_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = Column(String(64), nullable=False)
    status = Column(String(20), nullable=False, default=PlayerStatus.CONNECTED.value)
    # Possible values: 'CONNECTED', 'DISCONNECTED', 'KICKED'

    is_host = Column(Boolean, nullable=False, default=False)
    joined_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))

    def __repr__(self):
        return f"<Player(id={self.player_id}, name={self.name}, party_id={self.party_id}, host={self.is_host})>"
