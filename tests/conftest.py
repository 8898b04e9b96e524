"""
Shared test fixtures.

Everything is in-memory: a small event catalogue around London, a user
profile, and a similarity index keyed by attended event id.
"""

import os

import pytest

from eventrec.config import Settings
from eventrec.domain import recommender as recommender_module
from eventrec.domain.entities import Event, Point, User
from eventrec.domain.recommender import Recommender

LONDON = Point(51.5074, -0.1278)
PARIS = Point(48.8566, 2.3522)


@pytest.fixture
def user() -> User:
    return User(
        attended_events=["e1"],
        preferences=["music", "art"],
        location=LONDON,
    )


@pytest.fixture
def events() -> list[Event]:
    return [
        Event(id="e1", categories=["music"], location=LONDON, popularity=0.9),
        Event(id="e2", categories=["music"], location=LONDON, popularity=0.5),
        Event(id="e3", categories=["sports"], location=PARIS, popularity=0.1),
        Event(id="e4", categories=["art", "food"], location=PARIS, popularity=0.7),
        Event(id="e5", categories=None, location=None, popularity=None),
    ]


@pytest.fixture
def similarity() -> dict[str, list[str]]:
    return {"e1": ["e2", "e4"]}


@pytest.fixture(autouse=True)
def default_settings(monkeypatch) -> Settings:
    """Built-in weights, whatever EVENTREC_* or .env say on this machine."""
    for name in list(os.environ):
        if name.upper().startswith("EVENTREC_"):
            monkeypatch.delenv(name)
    pinned = Settings(_env_file=None)
    monkeypatch.setattr(recommender_module, "default_settings", pinned)
    return pinned


@pytest.fixture
def recommender(default_settings) -> Recommender:
    return Recommender(settings=default_settings)
