"""
Time source and ISO-8601 helpers.

Calculators and the ticket service never read the wall clock directly;
they take a ``Clock`` so tests can freeze time.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Union

from kove.errors import InvalidInputError

Clock = Callable[[], datetime]

TimestampLike = Union[str, datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def fixed_clock(instant: TimestampLike) -> Clock:
    """Return a clock that always reports ``instant``."""
    frozen = parse_timestamp(instant, field="instant")
    return lambda: frozen


def parse_timestamp(value: TimestampLike, field: str = "timestamp") -> datetime:
    """
    Parse an ISO-8601 string (or pass through a datetime) as an aware UTC datetime.

    Naive values are taken to be UTC. A trailing ``Z`` is accepted.
    Raises InvalidInputError when the value cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidInputError(f"invalid_{field}: cannot parse {value!r}") from None
    else:
        raise InvalidInputError(f"invalid_{field}: expected ISO-8601 string, got {type(value).__name__}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        raise InvalidInputError(f"invalid_{field}: out of range") from None


def to_iso(value: datetime) -> str:
    """Render an aware datetime as ISO-8601 UTC with a ``Z`` suffix."""
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
