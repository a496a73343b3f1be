"""Shared pydantic building blocks for API payloads."""
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer

from party_backend.utils.datetime_helpers import ensure_utc


def serialize_datetime_utc(dt: datetime) -> str:
    """ISO 8601 in UTC with a ``Z`` suffix. Naive values (SQLite) are taken as UTC."""
    return ensure_utc(dt).isoformat().replace("+00:00", "Z")


# Timestamp that leaves the API as a UTC "Z" string; Python dumps keep the datetime
UtcDatetime = Annotated[
    datetime,
    PlainSerializer(serialize_datetime_utc, return_type=str, when_used="json"),
]


class BaseSchema(BaseModel):
    """Response payload read off ORM rows and engine dataclasses by attribute."""

    model_config = ConfigDict(from_attributes=True)
