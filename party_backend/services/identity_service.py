"""Anonymous identity assignment for party players."""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import UUID
import logging
import random

from party_backend.data.identity_pool import ALIAS_POOL, AVATAR_SILHOUETTES, PLAYER_COLORS
from party_backend.models import EntityType
from party_backend.services.store import Store
from party_backend.utils.exceptions import IdentityPoolExhaustedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    alias: str
    silhouette: str
    color: str


class IdentityService:
    """Hands out aliases, silhouettes and colors that are unique within a party."""

    def __init__(
        self,
        store: Store,
        aliases: Sequence[str] = ALIAS_POOL,
        silhouettes: Sequence[str] = AVATAR_SILHOUETTES,
        colors: Sequence[str] = PLAYER_COLORS,
    ):
        self.store = store
        self.aliases = list(aliases)
        self.silhouettes = list(silhouettes)
        self.colors = list(colors)

    @property
    def capacity(self) -> int:
        """Largest party the pools can serve."""
        return min(len(self.aliases), len(self.silhouettes), len(self.colors))

    def plan(
        self,
        party_id: UUID,
        player_ids: Sequence[UUID],
        rng: Optional[random.Random] = None,
    ) -> Tuple[Dict[UUID, Identity], List[Tuple[EntityType, dict]]]:
        """Draw identities without persisting them.

        Returns the identities and the PartyIdentity rows that store them, so
        callers can write those rows in the same transaction as the players.

        Raises:
            IdentityPoolExhaustedError: More players than any pool can serve
        """
        if len(player_ids) > self.capacity:
            raise IdentityPoolExhaustedError(
                f"Cannot assign {len(player_ids)} identities; pool capacity is {self.capacity}"
            )

        rng = rng or random.Random()
        count = len(player_ids)
        aliases = rng.sample(self.aliases, count)
        silhouettes = rng.sample(self.silhouettes, count)
        colors = rng.sample(self.colors, count)

        identities = {
            player_id: Identity(alias=alias, silhouette=silhouette, color=color)
            for player_id, alias, silhouette, color in zip(player_ids, aliases, silhouettes, colors)
        }
        items = [
            (
                EntityType.PARTY_IDENTITY,
                {
                    "party_id": party_id,
                    "player_id": player_id,
                    "alias": identity.alias,
                    "silhouette": identity.silhouette,
                    "color": identity.color,
                },
            )
            for player_id, identity in identities.items()
        ]
        return identities, items

    async def assign_unique(
        self,
        party_id: UUID,
        player_ids: Sequence[UUID],
        rng: Optional[random.Random] = None,
    ) -> Dict[UUID, Identity]:
        """Assign and persist one identity per player.

        Args:
            party_id: Party the players belong to
            player_ids: Players to assign, in order
            rng: Random source (a fresh ``random.Random`` when omitted)

        Returns:
            Mapping of player id to the identity it received

        Raises:
            IdentityPoolExhaustedError: More players than any pool can serve
        """
        identities, items = self.plan(party_id, player_ids, rng)
        await self.store.create_many(items)

        logger.info(f"Assigned {len(identities)} identities in party {party_id}")
        return identities
