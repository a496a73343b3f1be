"""Party lifecycle state machine."""
from typing import Any, List, Optional, Tuple
from uuid import UUID
import logging

from party_backend.models import EntityType, Party, PartyStatus
from party_backend.services.store import EntityItems, Store
from party_backend.utils.datetime_helpers import utc_now
from party_backend.utils.exceptions import InvalidTransitionError, party_not_found

logger = logging.getLogger(__name__)

_STATUS_PROGRESSION = {
    PartyStatus.LOBBY: PartyStatus.SUBMITTING,
    PartyStatus.SUBMITTING: PartyStatus.PLAYING,
    PartyStatus.PLAYING: PartyStatus.FINALE,
    PartyStatus.FINALE: PartyStatus.COMPLETE,
}


def next_status(status: PartyStatus) -> Optional[PartyStatus]:
    """The state after ``status``, or None when ``status`` is terminal."""
    return _STATUS_PROGRESSION.get(PartyStatus(status))


def is_terminal(status: PartyStatus) -> bool:
    return next_status(status) is None


class PartyLifecycleService:
    """Moves parties forward through LOBBY → SUBMITTING → PLAYING → FINALE → COMPLETE."""

    def __init__(self, store: Store):
        self.store = store

    async def get_party(self, party_id: UUID) -> Party:
        party = await self.store.get(EntityType.PARTY, party_id)
        if not party:
            raise party_not_found(party_id)
        return party

    async def advance_party_state(self, party_id: UUID) -> PartyStatus:
        """Advance a party to the next lifecycle state.

        The update is conditional on the status read here, so two concurrent
        advances cannot both apply.

        Args:
            party_id: UUID of the party

        Returns:
            PartyStatus: The new status

        Raises:
            NotFoundError: If the party doesn't exist (PARTY_NOT_FOUND)
            InvalidTransitionError: If the party is COMPLETE or another
                transition was applied first
        """
        new_status, _ = await self.advance_with_entities(party_id, ())
        return new_status

    async def advance_with_entities(
        self,
        party_id: UUID,
        items: EntityItems,
        expected_status: Optional[PartyStatus] = None,
    ) -> Tuple[PartyStatus, List[Any]]:
        """Advance a party and create ``items`` in the same transaction.

        Either the transition and every insert are applied, or nothing is.

        Raises:
            NotFoundError: If the party doesn't exist (PARTY_NOT_FOUND)
            InvalidTransitionError: If the party is not in ``expected_status``
                (when given), is COMPLETE, or changed state concurrently
        """
        party = await self.get_party(party_id)
        current = PartyStatus(party.status)

        if expected_status is not None and current != PartyStatus(expected_status):
            logger.warning(f"Party {party_id} is {current.value}, expected {PartyStatus(expected_status).value}")
            raise InvalidTransitionError(
                f"Party {party_id} is {current.value}, not {PartyStatus(expected_status).value}"
            )

        new_status = next_status(current)
        if new_status is None:
            logger.warning(f"Cannot advance party {party_id} from {current.value}")
            raise InvalidTransitionError(
                f"Party {party_id} is {current.value} and cannot be advanced"
            )

        fields = {"status": new_status.value}
        now = utc_now()
        if new_status == PartyStatus.SUBMITTING:
            fields["started_at"] = now
        if new_status == PartyStatus.COMPLETE:
            fields["completed_at"] = now

        result = await self.store.update_if_and_create(
            EntityType.PARTY,
            party_id,
            expected={"status": current.value},
            fields=fields,
            items=items,
        )
        if result is None:
            logger.warning(
                f"Party {party_id} changed state concurrently; {current.value} -> {new_status.value} not applied"
            )
            raise InvalidTransitionError(
                f"Party {party_id} is no longer {current.value}"
            )

        _, created = result
        logger.info(f"Advanced party {party_id} from {current.value} to {new_status.value}")
        return new_status, created
