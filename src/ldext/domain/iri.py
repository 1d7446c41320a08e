"""IRI validation for identifier-valued properties.

IRIs are kept as plain strings so they serialize byte-for-byte as they
were received. Validation only checks the structural minimum: a scheme
followed by an authority or path, and no whitespace.
"""

from __future__ import annotations

import re
from typing import Annotated
from urllib.parse import urlsplit

from pydantic import AfterValidator

_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


def validate_iri(value: str) -> str:
    """Return *value* unchanged if it looks like an absolute IRI.

    Raises:
        ValueError: *value* has no scheme, no authority or path, or
            contains whitespace.
    """
    if any(ch.isspace() for ch in value):
        msg = f"IRI must not contain whitespace: {value!r}"
        raise ValueError(msg)
    parts = urlsplit(value)
    if not parts.scheme or not _SCHEME_PATTERN.match(parts.scheme):
        msg = f"IRI must be absolute: {value!r}"
        raise ValueError(msg)
    if not (parts.netloc or parts.path):
        msg = f"IRI has no authority or path: {value!r}"
        raise ValueError(msg)
    return value


Iri = Annotated[str, AfterValidator(validate_iri)]
