"""Shared fixtures: a recording fake transport and offline settings."""

from __future__ import annotations

import json
import os
from typing import Any

import pytest

from core.config import AppSettings

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def load_fixture(name: str) -> dict[str, Any]:
    with open(os.path.join(FIXTURES_DIR, name), encoding="utf-8") as f:
        return json.load(f)


class FakeTransport:
    """Records every query and answers with a canned `data` object."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self.data = data or {}
        self.queries: list[str] = []

    async def execute(self, query: str) -> dict[str, Any]:
        self.queries.append(query)
        return self.data


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def settings():
    return AppSettings(
        _env_file=None,
        api_url="https://api.example.test/graphql",
        subscription_key="secret-key",
    )


@pytest.fixture
def place_by_id_data():
    return load_fixture("place_by_id.json")
