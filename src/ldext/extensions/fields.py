"""Base model for extension field structures."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ExtensionFields(BaseModel):
    """Typed fields an extension pulls out of the property bag.

    Wire keys are camelCase. Sub-properties the model does not declare
    are kept (``extra="allow"``) so they survive a round trip.
    Assignments are validated, so setters cannot store a malformed value.
    """

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        validate_by_alias=True,
        validate_by_name=True,
        validate_assignment=True,
    )
