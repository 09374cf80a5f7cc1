"""Shared fixtures: in-memory stores and services with fixed seeds."""

from __future__ import annotations

import random

import pytest

from backend.services import GameService
from backend.storage import JsonStore


@pytest.fixture
def store() -> JsonStore:
    return JsonStore()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def service(store: JsonStore, rng: random.Random) -> GameService:
    return GameService(store, rng=rng)
