"""Central registry for entity enums and their concrete SQLAlchemy models.

Enums live here rather than in ``party_backend.models`` so schemas can use
them without importing the ORM layer.
"""
from typing import Type
from enum import Enum


class PartyStatus(str, Enum):
    """Party lifecycle states, in their only legal order."""
    LOBBY = "LOBBY"
    SUBMITTING = "SUBMITTING"
    PLAYING = "PLAYING"
    FINALE = "FINALE"
    COMPLETE = "COMPLETE"


class PlayerStatus(str, Enum):
    """Player connection status."""
    CONNECTED = "CONNECTED"
    DISCONNECTED = "DISCONNECTED"
    KICKED = "KICKED"


class EntityType(str, Enum):
    """Entity kinds addressable through the Store."""
    PARTY = "party"
    PLAYER = "player"
    SONG = "song"
    VOTE = "vote"
    ROUND = "round"
    ROUND_THEME = "round_theme"
    PARTY_THEME = "party_theme"
    PARTY_IDENTITY = "party_identity"
    BONUS_RESULT = "bonus_result"


def get_model(entity_type: EntityType) -> Type:
    """Get the concrete model for an entity type."""
    from party_backend import models

    registry = {
        EntityType.PARTY: models.Party,
        EntityType.PLAYER: models.Player,
        EntityType.SONG: models.Song,
        EntityType.VOTE: models.Vote,
        EntityType.ROUND: models.Round,
        EntityType.ROUND_THEME: models.RoundTheme,
        EntityType.PARTY_THEME: models.PartyTheme,
        EntityType.PARTY_IDENTITY: models.PartyIdentity,
        EntityType.BONUS_RESULT: models.BonusResult,
    }
    try:
        return registry[EntityType(entity_type)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown entity type: {entity_type}") from None
