"""
Domain entities for event recommendation.

All entities are caller-owned and read-only to the engine.  Optional
fields are ``None`` when the caller has no data; every factor that needs
a field checks for it explicitly and contributes nothing when it is
missing.

``from_dict`` constructors accept the loosely-typed records produced by a
storage or transport layer.  They never raise: unknown shapes turn into
``None`` fields.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

EventId = Hashable
Category = str


def _first(data: Mapping, *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def is_hashable(value: Any) -> bool:
    """True when *value* can be a set member (a tuple holding a list cannot)."""
    try:
        hash(value)
    except TypeError:
        return False
    return True


def _as_sequence(value: Any) -> Optional[Sequence]:
    """Lists and tuples pass through; anything else (incl. ``str``) is absent."""
    if isinstance(value, (list, tuple)):
        return value
    return None


# ── Value Object ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class Point:
    latitude: float
    longitude: float

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Point"]:
        """Build from ``{lat, lng}`` or ``{latitude, longitude}``.

        Coordinates are kept as given; :func:`distance` decides validity.
        """
        if isinstance(data, Point):
            return data
        if not isinstance(data, Mapping):
            return None
        return cls(
            latitude=_first(data, "latitude", "lat"),
            longitude=_first(data, "longitude", "lng", "lon"),
        )


# ── Entities ──────────────────────────────────────────────────────────


@dataclass
class User:
    attended_events: Optional[Sequence[EventId]] = None
    preferences: Optional[Sequence[Category]] = None
    location: Optional[Point] = None

    @classmethod
    def from_dict(cls, data: Any) -> "User":
        if isinstance(data, User):
            return data
        if not isinstance(data, Mapping):
            return cls()
        location = _first(data, "location")
        return cls(
            attended_events=_as_sequence(
                _first(data, "attended_events", "attendedEvents")
            ),
            preferences=_as_sequence(_first(data, "preferences")),
            location=Point.from_dict(location) if location is not None else None,
        )


@dataclass
class Event:
    id: EventId = None
    categories: Optional[Sequence[Category]] = None
    location: Optional[Point] = None
    popularity: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Event":
        if isinstance(data, Event):
            return data
        if not isinstance(data, Mapping):
            return cls()
        location = _first(data, "location")
        event_id = _first(data, "id")
        return cls(
            id=event_id if is_hashable(event_id) else None,
            categories=_as_sequence(_first(data, "categories")),
            location=Point.from_dict(location) if location is not None else None,
            popularity=_first(data, "popularity"),
        )


@dataclass
class ScoredEvent:
    """An event with its total score; ``event`` is the caller's own object."""

    event: Any
    score: float = 0.0
    breakdown: dict[str, float] = field(default_factory=dict)
    distance_km: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly summary."""
        event_id = self.event.get("id") if isinstance(self.event, Mapping) else getattr(
            self.event, "id", None
        )
        return {
            "id": event_id,
            "score": round(self.score, 4),
            "breakdown": {name: round(v, 4) for name, v in self.breakdown.items()},
            "distance_km": (
                round(self.distance_km, 2) if self.distance_km is not None else None
            ),
        }
