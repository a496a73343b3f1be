"""Validation and naming for custom party theme constraints."""
from numbers import Real
from typing import Any, Mapping, Optional
import logging

from pydantic import ValidationError

from party_backend.schemas.theme import ThemeConstraints
from party_backend.utils.exceptions import InvalidConstraintsError

logger = logging.getLogger(__name__)

_LIST_FIELDS = ("genres", "decades", "moods")


def _pick(raw: Mapping[str, Any], name: str, alias: Optional[str] = None) -> Any:
    if alias and alias in raw:
        return raw[alias]
    return raw.get(name)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _reject(message: str, field: str) -> InvalidConstraintsError:
    logger.warning(f"Rejected theme constraints: {message}")
    return InvalidConstraintsError(message, field=field)


def validate_constraints(raw: Mapping[str, Any]) -> ThemeConstraints:
    """Validate raw constraints and return them typed.

    Accepts both the wire aliases (``bpmRange``, ``artistRestrictions``) and
    the snake_case field names. Absent or null fields are unconstrained.

    Raises:
        InvalidConstraintsError: Naming the first offending field
    """
    if not isinstance(raw, Mapping):
        raise _reject("Constraints must be an object", "constraints")

    bpm_range = _pick(raw, "bpm_range", "bpmRange")
    if bpm_range is not None:
        if not isinstance(bpm_range, Mapping):
            raise _reject("BPM range must have numeric min and max values", "bpmRange")
        bpm_min, bpm_max = bpm_range.get("min"), bpm_range.get("max")
        if not _is_number(bpm_min) or not _is_number(bpm_max):
            raise _reject("BPM range must have numeric min and max values", "bpmRange")
        if bpm_min < 0 or bpm_max < 0:
            raise _reject("BPM values cannot be negative", "bpmRange")
        if bpm_min > bpm_max:
            raise _reject("BPM min cannot be greater than max", "bpmRange")

    for name in _LIST_FIELDS:
        value = raw.get(name)
        if value is not None and not isinstance(value, (list, tuple)):
            raise _reject(f"{name.capitalize()} must be an array", name)

    explicit = raw.get("explicit")
    if explicit is not None and not isinstance(explicit, bool):
        raise _reject("Explicit must be a boolean or null", "explicit")

    artist_restrictions = _pick(raw, "artist_restrictions", "artistRestrictions")
    if artist_restrictions is not None and not isinstance(artist_restrictions, str):
        raise _reject("Artist restrictions must be a string", "artistRestrictions")

    try:
        return ThemeConstraints.model_validate(dict(raw))
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error.get("loc") else "constraints"
        raise _reject(f"Invalid value for {field}: {error['msg']}", field) from e


def _format_bpm(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def generate_custom_theme_name(constraints: ThemeConstraints) -> str:
    """Build a display name from the most descriptive constraints."""
    parts = []

    if constraints.genres:
        parts.append("/".join(constraints.genres[:2]))

    if constraints.decades:
        parts.append(constraints.decades[0])

    if constraints.moods:
        parts.append(constraints.moods[0])

    if constraints.bpm_range:
        bpm = constraints.bpm_range
        parts.append(f"{_format_bpm(bpm.min)}-{_format_bpm(bpm.max)} BPM")

    if not parts:
        return "Custom Theme"

    return f"Custom: {' • '.join(parts)}"
