"""Base utilities for SQLAlchemy models."""
import uuid
from sqlalchemy import Column, String, Text
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.sql import sqltypes

from party_backend.utils.model_registry import EntityType, PartyStatus, PlayerStatus  # noqa: F401


class AdaptiveUUID(sqltypes.TypeDecorator):
    """UUID stored natively on PostgreSQL and as 32-char hex elsewhere."""

    impl = sqltypes.String
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PGUUID(as_uuid=True))
        return dialect.type_descriptor(String(32))

    @staticmethod
    def _coerce_uuid(value):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))

    def process_bind_param(self, value, dialect):
        value = self._coerce_uuid(value)
        if value is None:
            return None
        if dialect.name == "postgresql":
            return value
        return value.hex

    def process_result_value(self, value, dialect):
        return self._coerce_uuid(value)


def get_uuid_column(*args, **kwargs):
    """Get UUID column type based on database dialect.

    Args:
        *args: Positional arguments to pass to Column (e.g., ForeignKey)
        **kwargs: Keyword arguments to pass to Column (e.g., primary_key=True)

    Returns:
        Column: Configured SQLAlchemy Column for UUID storage

    Example:
        party_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
        song_id = get_uuid_column(ForeignKey("songs.song_id"), nullable=False)
    """
    return Column(AdaptiveUUID(), *args, **kwargs)


class PydanticJSON(sqltypes.TypeDecorator):
    """Text column holding a pydantic model serialized as JSON.

    The ORM attribute is always the typed model; JSON text exists only
    in the database row.
    """

    impl = Text
    cache_ok = True

    def __init__(self, model_cls, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.model_cls = model_cls

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, dict):
            value = self.model_cls.model_validate(value)
        return value.model_dump_json(by_alias=True)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return self.model_cls.model_validate_json(value)

    def coerce_compared_value(self, op, value):
        return Text()
