"""Persistence contract consumed by the engine, and its SQLAlchemy implementation."""
from typing import Any, List, Mapping, Optional, Protocol, Sequence, Tuple
from uuid import UUID
import logging

from sqlalchemy import inspect, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from party_backend.models import BonusResult, EntityType, Party, PartyIdentity, Player, Song, Vote
from party_backend.utils.model_registry import get_model

logger = logging.getLogger(__name__)

EntityItems = Sequence[Tuple[EntityType, Mapping[str, Any]]]


class Store(Protocol):
    """Entity storage used by every engine service.

    ``get`` and ``update`` return ``None`` for a missing row; callers decide
    which NotFound code that maps to.
    """

    async def get(self, entity_type: EntityType, entity_id: Any) -> Optional[Any]: ...

    async def create(self, entity_type: EntityType, fields: Mapping[str, Any]) -> Any: ...

    async def create_many(self, items: EntityItems) -> List[Any]: ...

    async def update(self, entity_type: EntityType, entity_id: Any, fields: Mapping[str, Any]) -> Optional[Any]: ...

    async def update_if(
        self,
        entity_type: EntityType,
        entity_id: Any,
        expected: Mapping[str, Any],
        fields: Mapping[str, Any],
    ) -> Optional[Any]: ...

    async def update_if_and_create(
        self,
        entity_type: EntityType,
        entity_id: Any,
        expected: Mapping[str, Any],
        fields: Mapping[str, Any],
        items: EntityItems,
    ) -> Optional[Tuple[Any, List[Any]]]: ...

    async def list_votes_for_song(self, song_id: UUID) -> List[Vote]: ...

    async def find_vote(self, song_id: UUID, voter_id: UUID) -> Optional[Vote]: ...

    async def list_players_for_party(self, party_id: UUID) -> List[Player]: ...

    async def list_songs_for_party(self, party_id: UUID) -> List[Song]: ...

    async def list_songs_for_player(self, party_id: UUID, player_id: UUID) -> List[Song]: ...

    async def list_identities_for_party(self, party_id: UUID) -> List[PartyIdentity]: ...

    async def list_bonus_results(self, party_id: UUID) -> List[BonusResult]: ...

    async def code_in_use(self, code: str) -> bool: ...


class SQLAlchemyStore:
    """Store backed by an async SQLAlchemy session factory.

    Each call runs in its own session and transaction, so every method is
    atomic on its own. Returned entities are detached; mutate them only
    through ``update``/``update_if``.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @staticmethod
    async def _add_in_order(db: AsyncSession, items: EntityItems) -> List[Any]:
        # Flushing one at a time keeps inserts in caller order, parents first
        entities = []
        for entity_type, fields in items:
            entity = get_model(entity_type)(**dict(fields))
            db.add(entity)
            await db.flush()
            entities.append(entity)
        return entities

    async def get(self, entity_type: EntityType, entity_id: Any) -> Optional[Any]:
        model = get_model(entity_type)
        async with self._session_factory() as db:
            return await db.get(model, entity_id)

    async def create(self, entity_type: EntityType, fields: Mapping[str, Any]) -> Any:
        entities = await self.create_many([(entity_type, fields)])
        return entities[0]

    async def create_many(self, items: EntityItems) -> List[Any]:
        """Create several entities in one transaction, in the given order."""
        if not items:
            return []

        async with self._session_factory() as db:
            entities = await self._add_in_order(db, items)
            await db.commit()
            for entity in entities:
                await db.refresh(entity)

        logger.debug(f"Created {len(entities)} entities: {[type(e).__name__ for e in entities]}")
        return entities

    async def update(self, entity_type: EntityType, entity_id: Any, fields: Mapping[str, Any]) -> Optional[Any]:
        model = get_model(entity_type)
        async with self._session_factory() as db:
            entity = await db.get(model, entity_id)
            if entity is None:
                return None
            for key, value in fields.items():
                setattr(entity, key, value)
            await db.commit()
            await db.refresh(entity)
            return entity

    async def update_if(
        self,
        entity_type: EntityType,
        entity_id: Any,
        expected: Mapping[str, Any],
        fields: Mapping[str, Any],
    ) -> Optional[Any]:
        """Update a row only if its current values match ``expected``.

        Returns the updated entity, or ``None`` when the row is missing or
        no longer matches (a concurrent writer got there first).
        """
        result = await self.update_if_and_create(entity_type, entity_id, expected, fields, ())
        return result[0] if result else None

    async def update_if_and_create(
        self,
        entity_type: EntityType,
        entity_id: Any,
        expected: Mapping[str, Any],
        fields: Mapping[str, Any],
        items: EntityItems,
    ) -> Optional[Tuple[Any, List[Any]]]:
        """Conditional update plus inserts, committed together or not at all.

        Returns ``(updated_entity, created_entities)``, or ``None`` when the
        row no longer matches ``expected``; nothing is written in that case.
        """
        model = get_model(entity_type)
        primary_key = inspect(model).primary_key[0]

        conditions = [primary_key == entity_id]
        conditions.extend(getattr(model, key) == value for key, value in expected.items())

        async with self._session_factory() as db:
            result = await db.execute(
                update(model)
                .where(*conditions)
                .values(**dict(fields))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                await db.rollback()
                return None

            created = await self._add_in_order(db, items)
            await db.commit()
            for entity in created:
                await db.refresh(entity)
            return await db.get(model, entity_id), created

    async def list_votes_for_song(self, song_id: UUID) -> List[Vote]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(Vote).where(Vote.song_id == song_id).order_by(Vote.voted_at)
            )
            return list(result.scalars().all())

    async def find_vote(self, song_id: UUID, voter_id: UUID) -> Optional[Vote]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(Vote).where(Vote.song_id == song_id, Vote.voter_id == voter_id)
            )
            return result.scalar_one_or_none()

    async def list_players_for_party(self, party_id: UUID) -> List[Player]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(Player)
                .where(Player.party_id == party_id)
                .order_by(Player.joined_at, Player.is_host.desc())
            )
            return list(result.scalars().all())

    async def list_songs_for_party(self, party_id: UUID) -> List[Song]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(Song)
                .where(Song.party_id == party_id)
                .order_by(Song.submitted_at, Song.round_number)
            )
            return list(result.scalars().all())

    async def list_songs_for_player(self, party_id: UUID, player_id: UUID) -> List[Song]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(Song)
                .where(Song.party_id == party_id, Song.submitter_id == player_id)
                .order_by(Song.round_number)
            )
            return list(result.scalars().all())

    async def list_identities_for_party(self, party_id: UUID) -> List[PartyIdentity]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(PartyIdentity).where(PartyIdentity.party_id == party_id)
            )
            return list(result.scalars().all())

    async def list_bonus_results(self, party_id: UUID) -> List[BonusResult]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(BonusResult)
                .where(BonusResult.party_id == party_id)
                .order_by(BonusResult.reveal_order)
            )
            return list(result.scalars().all())

    async def code_in_use(self, code: str) -> bool:
        async with self._session_factory() as db:
            result = await db.execute(select(Party.party_id).where(Party.code == code))
            return result.first() is not None
