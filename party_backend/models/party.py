"""Party model."""
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    String,
)
from datetime import datetime, UTC
import uuid

from party_backend.database import Base
from party_backend.models.base import PartyStatus, PydanticJSON, get_uuid_column
from party_backend.schemas.party import PartySettings


class Party(Base):
    """One instance of the game, moving through a fixed lifecycle.

    ``settings`` is a typed :class:`PartySettings`; the JSON text form only
    exists in the database row.
    """
    __tablename__ = "parties"

    # Primary key
    party_id = get_uuid_column(primary_key=True, default=uuid.uuid4)

    # Join code
    code = Column(String(8), unique=True, nullable=False)

    # Host player reference (no FK: the host row is created after the party)
    host_id = get_uuid_column(nullable=False)

    # Lifecycle
    status = Column(String(20), nullable=False, default=PartyStatus.LOBBY.value)
    # Possible values: 'LOBBY', 'SUBMITTING', 'PLAYING', 'FINALE', 'COMPLETE'

    is_demo_mode = Column(Boolean, nullable=False, default=False)
    settings = Column(PydanticJSON(PartySettings), nullable=False, default=lambda: PartySettings())

    # Party theme (predefined id or custom theme uuid as text)
    party_theme_id = Column(String(64), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Party(id={self.party_id}, code={self.code}, status={self.status}, demo={self.is_demo_mode})>"
