"""Party/round theme lookup, custom themes and theme adherence scoring."""
from typing import Any, Iterable, List, Mapping, Optional, Sequence
from uuid import UUID
import logging
import random
import uuid

from party_backend.config import Settings, get_settings
from party_backend.models import EntityType, PartyTheme, RoundTheme, Vote
from party_backend.services.catalog import PartyThemeDefinition, RoundThemeDefinition, StaticCatalog
from party_backend.services.constraint_validator import generate_custom_theme_name, validate_constraints
from party_backend.services.store import Store
from party_backend.utils.exceptions import (
    InvalidRatingError,
    party_not_found,
    round_not_found,
    song_not_found,
    theme_not_found,
    vote_not_found,
)

logger = logging.getLogger(__name__)

THEME_BONUS_BASE = 0.5
THEME_BONUS_THRESHOLD = 4.0
MIN_ADHERENCE_RATING = 1
MAX_ADHERENCE_RATING = 5

CUSTOM_THEME_DESCRIPTION = "Custom theme with specific constraints"
CUSTOM_THEME_ICON = "🎨"


def integral_rating(value: Any, low: int, high: int) -> Optional[int]:
    """``value`` as an int within [low, high], or None when it is not one.

    JSON clients may send whole numbers as floats (``4.0``); those count.
    Booleans never do.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or not low <= value <= high:
        return None
    return value


def compute_theme_bonus(
    votes: Iterable[Vote],
    bonus_multiplier: float = 1.0,
    base: float = THEME_BONUS_BASE,
    threshold: float = THEME_BONUS_THRESHOLD,
) -> float:
    """Theme bonus earned by a song from its votes' adherence ratings.

    Votes without an adherence rating are ignored. The bonus is
    ``base * bonus_multiplier`` when the average rating reaches
    ``threshold`` (inclusive), otherwise 0.
    """
    ratings = [v.theme_adherence_rating for v in votes if v.theme_adherence_rating is not None]
    if not ratings:
        return 0.0

    average = sum(ratings) / len(ratings)
    if average >= threshold:
        return base * bonus_multiplier
    return 0.0


def _round_theme_from_row(row: RoundTheme) -> RoundThemeDefinition:
    return RoundThemeDefinition(
        theme_id=row.theme_id,
        name=row.name,
        prompt=row.prompt,
        voting_prompt=row.voting_prompt,
        icon=row.icon,
        bonus_multiplier=row.bonus_multiplier,
    )


def _party_theme_from_row(row: PartyTheme) -> PartyThemeDefinition:
    return PartyThemeDefinition(
        theme_id=row.theme_id,
        name=row.name,
        description=row.description,
        icon=row.icon,
        constraints=row.constraints,
        is_custom=row.is_custom,
    )


class ThemeService:
    """Service for party and round themes."""

    def __init__(self, store: Store, catalog: StaticCatalog, settings: Optional[Settings] = None):
        self.store = store
        self.catalog = catalog
        self.settings = settings or get_settings()

    # ---- Lookup ----

    def list_party_themes(self) -> List[PartyThemeDefinition]:
        return self.catalog.predefined_party_themes()

    def list_round_themes(self) -> List[RoundThemeDefinition]:
        return self.catalog.predefined_round_themes()

    async def get_round_theme(self, theme_id: str) -> Optional[RoundThemeDefinition]:
        """Resolve a round theme id, predefined themes first, then stored ones."""
        predefined = self.catalog.find_round_theme(theme_id)
        if predefined:
            return predefined

        row = await self.store.get(EntityType.ROUND_THEME, theme_id)
        return _round_theme_from_row(row) if row else None

    async def get_party_theme(self, theme_id: str) -> Optional[PartyThemeDefinition]:
        """Resolve a party theme id, predefined themes first, then stored ones."""
        predefined = self.catalog.find_party_theme(theme_id)
        if predefined:
            return predefined

        row = await self.store.get(EntityType.PARTY_THEME, theme_id)
        return _party_theme_from_row(row) if row else None

    async def get_party_theme_for_party(self, party_id: UUID) -> Optional[PartyThemeDefinition]:
        party = await self.store.get(EntityType.PARTY, party_id)
        if not party:
            raise party_not_found(party_id)
        if not party.party_theme_id:
            return None
        return await self.get_party_theme(party.party_theme_id)

    async def get_round_theme_for_round(self, round_id: UUID) -> Optional[RoundThemeDefinition]:
        round_ = await self.store.get(EntityType.ROUND, round_id)
        if not round_:
            raise round_not_found(round_id)
        if not round_.theme_id:
            return None
        return await self.get_round_theme(round_.theme_id)

    def get_random_round_theme(
        self,
        exclude_ids: Sequence[str] = (),
        rng: Optional[random.Random] = None,
    ) -> RoundThemeDefinition:
        """Pick a predefined round theme, avoiding ``exclude_ids`` when possible."""
        rng = rng or random.Random()
        themes = self.catalog.predefined_round_themes()
        available = [t for t in themes if t.theme_id not in set(exclude_ids)]
        # Everything excluded: fall back to the full list
        return rng.choice(available or themes)

    # ---- Assignment ----

    async def assign_round_theme(self, round_id: UUID, theme_id: str) -> RoundThemeDefinition:
        """Attach a round theme to a round.

        Raises:
            NotFoundError: ROUND_NOT_FOUND or THEME_NOT_FOUND
        """
        round_ = await self.store.get(EntityType.ROUND, round_id)
        if not round_:
            raise round_not_found(round_id)

        theme = await self.get_round_theme(theme_id)
        if not theme:
            raise theme_not_found(theme_id)

        await self.store.update(EntityType.ROUND, round_id, {"theme_id": theme_id})
        logger.info(f"Assigned round theme {theme_id} to round {round_id}")
        return theme

    async def set_party_theme(self, party_id: UUID, theme_id: str) -> PartyThemeDefinition:
        """Attach a party-wide theme to a party.

        Raises:
            NotFoundError: PARTY_NOT_FOUND or THEME_NOT_FOUND
        """
        party = await self.store.get(EntityType.PARTY, party_id)
        if not party:
            raise party_not_found(party_id)

        theme = await self.get_party_theme(theme_id)
        if not theme:
            raise theme_not_found(theme_id)

        await self.store.update(EntityType.PARTY, party_id, {"party_theme_id": theme_id})
        logger.info(f"Set party theme {theme_id} on party {party_id}")
        return theme

    async def create_custom_theme(self, party_id: UUID, constraints: Mapping[str, Any]) -> PartyThemeDefinition:
        """Validate constraints and store them as a new custom party theme.

        Args:
            party_id: Party the theme is created for
            constraints: Raw constraints (wire aliases or field names)

        Returns:
            PartyThemeDefinition: The stored theme, ``is_custom`` set

        Raises:
            NotFoundError: If the party doesn't exist (PARTY_NOT_FOUND)
            InvalidConstraintsError: If any constraint is malformed
        """
        party = await self.store.get(EntityType.PARTY, party_id)
        if not party:
            raise party_not_found(party_id)

        typed = validate_constraints(constraints)
        name = generate_custom_theme_name(typed)

        row = await self.store.create(EntityType.PARTY_THEME, {
            "theme_id": str(uuid.uuid4()),
            "name": name,
            "description": CUSTOM_THEME_DESCRIPTION,
            "icon": CUSTOM_THEME_ICON,
            "constraints": typed,
            "is_custom": True,
        })

        logger.info(f"Created custom theme {row.theme_id} ({name}) for party {party_id}")
        return _party_theme_from_row(row)

    # ---- Adherence ----

    async def record_theme_adherence(self, vote_id: UUID, rating: Any) -> Vote:
        """Store a voter's 1-5 theme adherence rating on their vote.

        Raises:
            InvalidRatingError: If rating is not an integer in 1-5
            NotFoundError: If the vote doesn't exist (VOTE_NOT_FOUND)
        """
        value = integral_rating(rating, MIN_ADHERENCE_RATING, MAX_ADHERENCE_RATING)
        if value is None:
            logger.warning(f"Rejected theme adherence rating {rating!r} for vote {vote_id}")
            raise InvalidRatingError(
                f"Theme adherence rating must be an integer between "
                f"{MIN_ADHERENCE_RATING} and {MAX_ADHERENCE_RATING}",
                field="rating",
            )

        vote = await self.store.get(EntityType.VOTE, vote_id)
        if not vote:
            raise vote_not_found(vote_id)

        return await self.store.update(EntityType.VOTE, vote_id, {"theme_adherence_rating": value})

    async def get_bonus_multiplier(self, round_id: Optional[UUID]) -> float:
        """Multiplier of the round's theme; 1.0 without a round or a resolvable theme."""
        if round_id is None:
            return 1.0

        round_ = await self.store.get(EntityType.ROUND, round_id)
        if not round_ or not round_.theme_id:
            return 1.0

        theme = await self.get_round_theme(round_.theme_id)
        return theme.bonus_multiplier if theme else 1.0

    async def compute_theme_bonus(self, song_id: UUID) -> float:
        """Theme bonus for a stored song. Read-only.

        Raises:
            NotFoundError: If the song doesn't exist (SONG_NOT_FOUND)
        """
        song = await self.store.get(EntityType.SONG, song_id)
        if not song:
            raise song_not_found(song_id)

        multiplier = await self.get_bonus_multiplier(song.round_id)
        votes = await self.store.list_votes_for_song(song_id)
        return compute_theme_bonus(
            votes,
            bonus_multiplier=multiplier,
            base=self.settings.theme_bonus_base,
            threshold=self.settings.theme_bonus_threshold,
        )
