"""Anonymous party identity model."""
from sqlalchemy import (
    Column,
    ForeignKey,
    String,
    UniqueConstraint,
)
import uuid

from party_backend.database import Base
from party_backend.models.base import get_uuid_column


class PartyIdentity(Base):
    """Alias, silhouette and color shown in place of a player's name."""
    __tablename__ = "party_identities"

    identity_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
    party_id = get_uuid_column(
        ForeignKey("parties.party_id", ondelete="CASCADE"),
        nullable=False,
    )
    player_id = get_uuid_column(
        ForeignKey("players.player_id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    alias = Column(String(64), nullable=False)
    silhouette = Column(String(32), nullable=False)
    color = Column(String(16), nullable=False)

    __table_args__ = (
        UniqueConstraint("party_id", "alias", name="uq_party_identities_alias"),
        UniqueConstraint("party_id", "silhouette", name="uq_party_identities_silhouette"),
        UniqueConstraint("party_id", "color", name="uq_party_identities_color"),
    )

    def __repr__(self):
        return f"<PartyIdentity(player_id={self.player_id}, alias={self.alias})>"
