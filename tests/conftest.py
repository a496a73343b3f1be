"""Pytest configuration and fixtures."""
import os
import random
import tempfile
from datetime import timedelta
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

# Keep log files from the app module out of the working tree
os.environ.setdefault("LOG_DIR", str(Path(tempfile.gettempdir()) / "party_engine_test_logs"))

from party_backend.config import Settings
from party_backend.database import build_engine, build_session_factory, create_tables
from party_backend.models import EntityType, PartyStatus
from party_backend.schemas.party import PartySettings
from party_backend.services.container import PartyServices
from party_backend.services.store import SQLAlchemyStore
from party_backend.utils.datetime_helpers import utc_now


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a fresh SQLite file for each test."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
async def test_engine(settings):
    """Create the test database engine with all tables."""
    engine = build_engine(settings)
    await create_tables(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def store(test_engine):
    return SQLAlchemyStore(build_session_factory(test_engine))


@pytest.fixture
def services(store, settings):
    return PartyServices.build(store, settings)


@pytest.fixture
def rng():
    """Seeded random source so simulations are reproducible."""
    return random.Random(20240601)


@pytest.fixture
async def test_app(test_engine, services, settings):
    """Create test app wired to the test database."""
    from party_backend.main import create_app

    app = create_app(settings)
    app.state.engine = test_engine
    app.state.services = services
    yield app


@pytest.fixture
async def client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def party_factory(store):
    """Factory for creating a party with players, host first."""
    import uuid

    async def _create_party(
        player_count: int = 4,
        status: PartyStatus = PartyStatus.LOBBY,
        party_settings: PartySettings | None = None,
        is_demo_mode: bool = False,
    ):
        party_id = uuid.uuid4()
        player_ids = [uuid.uuid4() for _ in range(max(player_count, 1))]
        joined_at = utc_now()
        # Unique code per test party
        code = uuid.uuid4().hex[:8].upper()

        items = [(EntityType.PARTY, {
            "party_id": party_id,
            "code": code,
            "host_id": player_ids[0],
            "status": PartyStatus(status).value,
            "is_demo_mode": is_demo_mode,
            "settings": party_settings or PartySettings(),
        })]
        for index, player_id in enumerate(player_ids[:player_count]):
            items.append((EntityType.PLAYER, {
                "player_id": player_id,
                "party_id": party_id,
                "name": f"Player {index + 1}",
                "is_host": index == 0,
                "joined_at": joined_at + timedelta(microseconds=index),
            }))

        party, *players = await store.create_many(items)
        return party, players

    return _create_party


@pytest.fixture
def song_factory(store):
    """Factory for creating a submitted song."""

    async def _create_song(party, submitter, round_number: int = 1, confidence: int = 3, round_id=None):
        return await store.create(EntityType.SONG, {
            "party_id": party.party_id,
            "submitter_id": submitter.player_id,
            "round_id": round_id,
            "round_number": round_number,
            "confidence": confidence,
            "track_id": 4242,
            "title": "Test Track",
            "artist": "Test Artist",
            "duration_ms": 180000,
        })

    return _create_song


@pytest.fixture
def vote_factory(store):
    """Factory for creating a vote (locked unless told otherwise), bypassing party-state checks."""

    async def _create_vote(
        song,
        voter,
        rating: int = 7,
        theme_adherence_rating: int | None = None,
        super_vote: bool = False,
        locked: bool = True,
    ):
        now = utc_now()
        return await store.create(EntityType.VOTE, {
            "song_id": song.song_id,
            "voter_id": voter.player_id,
            "rating": rating,
            "theme_adherence_rating": theme_adherence_rating,
            "is_super_vote": super_vote,
            "is_locked": locked,
            "voted_at": now,
            "locked_at": now if locked else None,
        })

    return _create_vote
