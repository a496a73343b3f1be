"""Custom exceptions for the party engine."""
from typing import Optional


class PartyEngineException(Exception):
    """Base exception for all party engine errors.

    Every error carries a stable ``code`` that callers map to a precise
    user-facing message, plus the HTTP status used by the API layer.
    """
    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, code: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.field = field


class NotFoundError(PartyEngineException):
    """Raised when a referenced party, player, song, vote, round or theme does not exist."""
    code = "NOT_FOUND"
    status_code = 404


class InvalidTransitionError(PartyEngineException):
    """Raised when a lifecycle transition is not legal from the party's current state."""
    code = "INVALID_TRANSITION"
    status_code = 409


class InvalidRatingError(PartyEngineException):
    """Raised when a vote or theme adherence rating is out of range or not an integer."""
    code = "INVALID_ADHERENCE_RATING"
    status_code = 400


class InvalidConstraintsError(PartyEngineException):
    """Raised when custom theme constraints are malformed."""
    code = "INVALID_CONSTRAINTS"
    status_code = 400


class InvalidStateError(PartyEngineException):
    """Raised when an action is attempted in the wrong party state."""
    code = "INVALID_STATE"
    status_code = 409


class CannotVoteOwnSongError(PartyEngineException):
    """Raised when a player tries to rate their own song."""
    code = "CANNOT_VOTE_OWN_SONG"
    status_code = 400


class VoteLockedError(PartyEngineException):
    """Raised when a player has already cast a (locked) vote on a song."""
    code = "VOTE_LOCKED"
    status_code = 409


class IdentityPoolExhaustedError(PartyEngineException):
    """Raised when a party has more players than available identities."""
    code = "IDENTITY_POOL_EXHAUSTED"
    status_code = 500


class PartyCodeUnavailableError(PartyEngineException):
    """Raised when no unused party code could be generated."""
    code = "PARTY_CODE_UNAVAILABLE"
    status_code = 503


def party_not_found(party_id) -> NotFoundError:
    return NotFoundError(f"Party {party_id} does not exist", code="PARTY_NOT_FOUND")


def player_not_found(player_id) -> NotFoundError:
    return NotFoundError(f"Player {player_id} does not exist", code="PLAYER_NOT_FOUND")


def song_not_found(song_id) -> NotFoundError:
    return NotFoundError(f"Song {song_id} does not exist", code="SONG_NOT_FOUND")


def vote_not_found(vote_id) -> NotFoundError:
    return NotFoundError(f"Vote {vote_id} does not exist", code="VOTE_NOT_FOUND")


def round_not_found(round_id) -> NotFoundError:
    return NotFoundError(f"Round {round_id} does not exist", code="ROUND_NOT_FOUND")


def theme_not_found(theme_id) -> NotFoundError:
    return NotFoundError(f"Theme {theme_id} does not exist", code="THEME_NOT_FOUND")
