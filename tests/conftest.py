"""Shared pytest fixtures for ldext tests."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from ldext.config.settings import LdextSettings

PEM = (
    "-----BEGIN PUBLIC KEY-----\n"
    "MIIBIjANBgkqhkiG9w0BAQEFAAOCAQ8AMIIBCgKCAQEAvXc4vkECU2/CeuSo1wtn\n"
    "-----END PUBLIC KEY-----\n"
)

ACTOR: dict[str, Any] = {
    "@context": [
        "https://www.w3.org/ns/activitystreams",
        "https://w3id.org/security/v1",
    ],
    "id": "https://example.com/users/alice",
    "type": "Person",
    "preferredUsername": "alice",
    "name": "Alice",
    "summary": "<p>Hello</p>",
    "url": "https://example.com/@alice",
    "inbox": "https://example.com/users/alice/inbox",
    "outbox": "https://example.com/users/alice/outbox",
    "followers": "https://example.com/users/alice/followers",
    "following": "https://example.com/users/alice/following",
    "manuallyApprovesFollowers": False,
    "discoverable": True,
    "publicKey": {
        "id": "https://example.com/users/alice#main-key",
        "owner": "https://example.com/users/alice",
        "publicKeyPem": PEM,
    },
    "featured": "https://example.com/users/alice/collections/featured",
    "endpoints": {"sharedInbox": "https://example.com/inbox"},
}

SIGNATURE: dict[str, Any] = {
    "type": "RsaSignature2017",
    "creator": "https://example.com/users/alice#main-key",
    "created": "2017-09-23T20:21:34Z",
    "signatureValue": "BE9JNa3GlvqN7VPzqVxrJmfq5X0T0Sj8ebbHNZ/lCfdzCzXh6w==",
}


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test in an empty directory with no LDEXT_* environment."""
    for name in list(os.environ):
        if name.startswith("LDEXT_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def actor_data() -> dict[str, Any]:
    """An ActivityPub actor with a publicKey block and unknown properties."""
    return copy.deepcopy(ACTOR)


@pytest.fixture
def signed_actor_data(actor_data: dict[str, Any]) -> dict[str, Any]:
    """The actor plus a linked-data signature block."""
    actor_data["signature"] = copy.deepcopy(SIGNATURE)
    return actor_data


@pytest.fixture
def actor_file(tmp_path: Path, actor_data: dict[str, Any]) -> Path:
    """The actor written to ``actor.json``."""
    path = tmp_path / "actor.json"
    path.write_text(json.dumps(actor_data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def signed_actor_file(tmp_path: Path, signed_actor_data: dict[str, Any]) -> Path:
    path = tmp_path / "signed.json"
    path.write_text(json.dumps(signed_actor_data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def settings() -> LdextSettings:
    """Default settings with no config file."""
    return LdextSettings.from_cli()


@pytest.fixture
def pem() -> str:
    return PEM


@pytest.fixture
def signature_data() -> dict[str, Any]:
    return copy.deepcopy(SIGNATURE)
