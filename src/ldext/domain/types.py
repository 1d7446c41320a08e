"""Shared enums for the document and extension layers."""

from __future__ import annotations

from enum import StrEnum


class CollisionPolicy(StrEnum):
    """What ``retracts()`` does when the reserved key is already in the bag."""

    ERROR = "error"
    OVERWRITE = "overwrite"


class ActorKind(StrEnum):
    """ActivityStreams actor types."""

    APPLICATION = "Application"
    GROUP = "Group"
    ORGANIZATION = "Organization"
    PERSON = "Person"
    SERVICE = "Service"
