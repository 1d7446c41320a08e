"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ldext.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ldext.domain.types import CollisionPolicy


class ComposeConfig(BaseModel):
    """[compose] section."""

    model_config = {"frozen": True}

    collision_policy: CollisionPolicy = CollisionPolicy.ERROR


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    indent: int = Field(default=2, ge=0)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    entry_points: bool = True
    disabled: list[str] = Field(default_factory=list)
