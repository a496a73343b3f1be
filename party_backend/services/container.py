"""Service container wiring the engine's services to one Store."""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence
from uuid import UUID
import random

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from party_backend.config import Settings, get_settings
from party_backend.models import BonusResult, PartyStatus, Song, Vote
from party_backend.services.catalog import PartyThemeDefinition, StaticCatalog
from party_backend.services.demo_service import DemoParty, DemoService
from party_backend.services.identity_service import IdentityService
from party_backend.services.party_lifecycle_service import PartyLifecycleService
from party_backend.services.scoring_service import FinalStanding, ScoreBreakdown, ScoringService, SongScore
from party_backend.services.store import SQLAlchemyStore, Store
from party_backend.services.theme_service import ThemeService


@dataclass
class PartyServices:
    """Every engine service, sharing one Store and one Catalog.

    Built once per application (see ``main.lifespan``) and handed to
    routers through a dependency.
    """
    store: Store
    catalog: StaticCatalog
    lifecycle: PartyLifecycleService
    themes: ThemeService
    scoring: ScoringService
    identities: IdentityService
    demo: DemoService

    @classmethod
    def build(cls, store: Store, settings: Optional[Settings] = None, catalog: Optional[StaticCatalog] = None) -> "PartyServices":
        settings = settings or get_settings()
        catalog = catalog or StaticCatalog()
        lifecycle = PartyLifecycleService(store)
        themes = ThemeService(store, catalog, settings)
        identities = IdentityService(store)
        return cls(
            store=store,
            catalog=catalog,
            lifecycle=lifecycle,
            themes=themes,
            scoring=ScoringService(store, themes),
            identities=identities,
            demo=DemoService(store, lifecycle, identities, catalog, settings),
        )

    @classmethod
    def from_session_factory(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Optional[Settings] = None,
    ) -> "PartyServices":
        return cls.build(SQLAlchemyStore(session_factory), settings)

    # Operations exposed to callers

    async def advance_party_state(self, party_id: UUID) -> PartyStatus:
        return await self.lifecycle.advance_party_state(party_id)

    async def compute_theme_bonus(self, song_id: UUID) -> float:
        return await self.themes.compute_theme_bonus(song_id)

    async def record_theme_adherence(self, vote_id: UUID, rating: Any) -> Vote:
        return await self.themes.record_theme_adherence(vote_id, rating)

    async def create_custom_theme(self, party_id: UUID, constraints: Mapping[str, Any]) -> PartyThemeDefinition:
        return await self.themes.create_custom_theme(party_id, constraints)

    async def run_demo_party(self, rng: Optional[random.Random] = None) -> DemoParty:
        return await self.demo.run_demo_party(rng)

    async def populate_demo_songs(self, party_id: UUID) -> list[Song]:
        return await self.demo.populate_demo_songs(party_id)

    async def simulate_voting(
        self,
        song_id: UUID,
        voter_ids: Sequence[UUID],
        rng: Optional[random.Random] = None,
    ) -> list[Vote]:
        return await self.demo.simulate_voting(song_id, voter_ids, rng)

    async def get_effective_play_duration(self, party_id: UUID) -> int:
        return await self.demo.get_effective_play_duration(party_id)

    async def get_effective_finale_animation_speed(self, party_id: UUID) -> float:
        return await self.demo.get_effective_finale_animation_speed(party_id)

    async def advance_demo(self, party_id: UUID) -> PartyStatus:
        return await self.demo.advance_demo(party_id)

    async def calculate_song_score(self, song_id: UUID) -> SongScore:
        return await self.scoring.calculate_song_score(song_id)

    async def lock_vote(self, song_id: UUID, voter_id: UUID) -> Vote:
        return await self.scoring.lock_vote(song_id, voter_id)

    async def calculate_bonus_winners(self, party_id: UUID, rng: Optional[random.Random] = None) -> list[BonusResult]:
        return await self.scoring.calculate_bonus_winners(party_id, rng)

    async def calculate_score_breakdown(self, player_id: UUID, party_id: UUID) -> ScoreBreakdown:
        return await self.scoring.calculate_score_breakdown(player_id, party_id)

    async def calculate_final_standings(self, party_id: UUID) -> list[FinalStanding]:
        return await self.scoring.calculate_final_standings(party_id)
