"""ISO 8601 timestamps kept as their wire text.

Parsing and re-serializing a timestamp changes its spelling
(``+00:00`` becomes ``Z``, ``.000`` is dropped), so timestamp-valued
properties store the string they were given and parse on demand.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, accepting a trailing ``Z``.

    Raises:
        ValueError: *value* is not an ISO 8601 date-time.
    """
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        msg = f"Not an ISO 8601 timestamp: {value!r}"
        raise ValueError(msg) from None


def validate_timestamp(value: str) -> str:
    """Return *value* unchanged if it parses as a timestamp."""
    parse_timestamp(value)
    return value


Timestamp = Annotated[str, AfterValidator(validate_timestamp)]
