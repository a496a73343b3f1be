"""Tests for the party lifecycle state machine."""
import asyncio
import uuid

import pytest

from party_backend.models import EntityType, PartyStatus
from party_backend.services.party_lifecycle_service import PartyLifecycleService, is_terminal, next_status
from party_backend.utils.exceptions import InvalidTransitionError, NotFoundError


def test_next_status_progression():
    assert next_status(PartyStatus.LOBBY) == PartyStatus.SUBMITTING
    assert next_status(PartyStatus.SUBMITTING) == PartyStatus.PLAYING
    assert next_status(PartyStatus.PLAYING) == PartyStatus.FINALE
    assert next_status(PartyStatus.FINALE) == PartyStatus.COMPLETE
    assert next_status(PartyStatus.COMPLETE) is None


def test_only_complete_is_terminal():
    assert is_terminal(PartyStatus.COMPLETE)
    assert not any(is_terminal(s) for s in PartyStatus if s != PartyStatus.COMPLETE)


@pytest.mark.asyncio
async def test_full_progression_sets_timestamps_once(store, party_factory):
    party, _ = await party_factory()
    lifecycle = PartyLifecycleService(store)

    assert await lifecycle.advance_party_state(party.party_id) == PartyStatus.SUBMITTING
    after_submit = await store.get(EntityType.PARTY, party.party_id)
    assert after_submit.started_at is not None
    assert after_submit.completed_at is None

    assert await lifecycle.advance_party_state(party.party_id) == PartyStatus.PLAYING
    assert await lifecycle.advance_party_state(party.party_id) == PartyStatus.FINALE
    before_complete = await store.get(EntityType.PARTY, party.party_id)
    assert before_complete.completed_at is None

    assert await lifecycle.advance_party_state(party.party_id) == PartyStatus.COMPLETE
    completed = await store.get(EntityType.PARTY, party.party_id)
    assert completed.status == PartyStatus.COMPLETE.value
    assert completed.completed_at is not None
    assert completed.started_at == after_submit.started_at


@pytest.mark.asyncio
async def test_advance_from_complete_fails(store, party_factory):
    party, _ = await party_factory(status=PartyStatus.COMPLETE)
    lifecycle = PartyLifecycleService(store)

    with pytest.raises(InvalidTransitionError) as exc_info:
        await lifecycle.advance_party_state(party.party_id)
    assert exc_info.value.code == "INVALID_TRANSITION"

    unchanged = await store.get(EntityType.PARTY, party.party_id)
    assert unchanged.status == PartyStatus.COMPLETE.value
    assert unchanged.completed_at is None


@pytest.mark.asyncio
async def test_missing_party(store):
    with pytest.raises(NotFoundError) as exc_info:
        await PartyLifecycleService(store).advance_party_state(uuid.uuid4())
    assert exc_info.value.code == "PARTY_NOT_FOUND"


@pytest.mark.asyncio
async def test_stale_read_loses_race(store, party_factory):
    """A transition computed from an outdated status is rejected, not applied."""
    party, _ = await party_factory(status=PartyStatus.PLAYING)

    # Another writer moves the party on between our read and our update
    moved = await store.update_if(
        EntityType.PARTY,
        party.party_id,
        expected={"status": PartyStatus.PLAYING.value},
        fields={"status": PartyStatus.FINALE.value},
    )
    assert moved is not None

    stale = await store.update_if(
        EntityType.PARTY,
        party.party_id,
        expected={"status": PartyStatus.PLAYING.value},
        fields={"status": PartyStatus.FINALE.value},
    )
    assert stale is None


@pytest.mark.asyncio
async def test_concurrent_advances_apply_at_most_once_each(store, party_factory):
    party, _ = await party_factory(status=PartyStatus.LOBBY)
    lifecycle = PartyLifecycleService(store)

    results = await asyncio.gather(
        lifecycle.advance_party_state(party.party_id),
        lifecycle.advance_party_state(party.party_id),
        return_exceptions=True,
    )

    successes = [r for r in results if isinstance(r, PartyStatus)]
    failures = [r for r in results if isinstance(r, InvalidTransitionError)]
    assert len(successes) + len(failures) == 2

    final = await store.get(EntityType.PARTY, party.party_id)
    # Each successful call moved the party exactly one step
    expected = [PartyStatus.LOBBY, PartyStatus.SUBMITTING, PartyStatus.PLAYING][len(successes)]
    assert final.status == expected.value
