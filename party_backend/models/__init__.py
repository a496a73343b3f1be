"""Database models."""
from party_backend.models.base import EntityType, PartyStatus, PlayerStatus
from party_backend.models.party import Party
from party_backend.models.player import Player
from party_backend.models.round import Round
from party_backend.models.song import Song
from party_backend.models.vote import Vote
from party_backend.models.theme import PartyTheme, RoundTheme
from party_backend.models.party_identity import PartyIdentity
from party_backend.models.bonus_result import BonusResult

__all__ = [
    "EntityType",
    "PartyStatus",
    "PlayerStatus",
    "Party",
    "Player",
    "Round",
    "Song",
    "Vote",
    "PartyTheme",
    "RoundTheme",
    "PartyIdentity",
    "BonusResult",
]
