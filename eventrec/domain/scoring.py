"""
Weighted Scoring Factors  (Strategy Pattern)
============================================

Formula
-------
Score = Similarity + Preference + Proximity + Popularity

Each term applies only when its preconditions hold; missing data adds 0,
never a penalty.

* **Similarity** (0.35)  = similar / total over attended events that have a
  similarity entry
* **Preference** (0.25)  = matches / min(|preferences|, |categories|)
* **Proximity**  (0.20)  = e^(-distance_km / 100)
* **Popularity** (0.20)  = popularity, unclamped

Complexity: O(U) per event for similarity (U = attended events), O(C) for
preference (C = event categories), O(1) for the rest.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional

from .distance import distance, is_finite_number
from .entities import Event, EventId, Point, User, is_hashable

logger = logging.getLogger(__name__)


@dataclass
class ScoringContext:
    """Per-call user data, computed once and shared by every factor."""

    attended_ids: list[EventId] = field(default_factory=list)
    attended_set: set[EventId] = field(default_factory=set)
    preferences: list = field(default_factory=list)
    preference_set: set = field(default_factory=set)
    location: Optional[Point] = None
    similarity: Mapping[EventId, Sequence[EventId]] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        user: User,
        similarity: Optional[Mapping[EventId, Sequence[EventId]]],
    ) -> "ScoringContext":
        attended = [e for e in (user.attended_events or []) if is_hashable(e)]
        preferences = list(user.preferences or [])
        return cls(
            attended_ids=attended,
            attended_set=set(attended),
            preferences=preferences,
            preference_set={p for p in preferences if is_hashable(p)},
            location=user.location,
            similarity=similarity if isinstance(similarity, Mapping) else {},
        )


# ── Strategy hierarchy ────────────────────────────────────────────────


class ScoringFactor(ABC):
    name: str = ""

    def __init__(self, weight: float):
        self.weight = weight

    @abstractmethod
    def contribute(self, context: ScoringContext, event: Event) -> Optional[float]:
        """Weighted subscore, or ``None`` when the factor does not apply."""


class SimilarityFactor(ScoringFactor):
    """Share of the user's attended events that list *event* as similar."""

    name = "similarity"

    def contribute(self, context: ScoringContext, event: Event) -> Optional[float]:
        if not context.attended_ids or not is_hashable(event.id):
            return None

        similar = 0
        total = 0
        for attended_id in context.attended_ids:
            entry = context.similarity.get(attended_id)
            if not isinstance(entry, (list, tuple, set, frozenset)):
                continue
            if event.id in entry:
                similar += 1
            total += 1

        if total == 0:
            return None
        return (similar / total) * self.weight


class PreferenceFactor(ScoringFactor):
    """Overlap between the event's categories and the user's preferences."""

    name = "preference"

    def contribute(self, context: ScoringContext, event: Event) -> Optional[float]:
        if not context.preferences or event.categories is None:
            return None

        matches = sum(
            1
            for category in event.categories
            if is_hashable(category) and category in context.preference_set
        )
        denom = min(len(context.preferences), len(event.categories))
        if denom == 0:
            return None
        return (matches / denom) * self.weight


class ProximityFactor(ScoringFactor):
    """Exponential decay of the user-to-event distance."""

    name = "proximity"

    def __init__(self, weight: float, decay_km: float = 100.0):
        super().__init__(weight)
        self.decay_km = decay_km

    def measure(
        self, context: ScoringContext, event: Event
    ) -> Optional[tuple[float, float]]:
        """``(distance_km, subscore)`` from a single Haversine call."""
        if context.location is None or event.location is None:
            return None
        km = distance(context.location, event.location)
        return km, math.exp(-km / self.decay_km) * self.weight

    def contribute(self, context: ScoringContext, event: Event) -> Optional[float]:
        measured = self.measure(context, event)
        return measured[1] if measured is not None else None


class PopularityFactor(ScoringFactor):
    name = "popularity"

    def contribute(self, context: ScoringContext, event: Event) -> Optional[float]:
        if event.popularity is None:
            return None
        if not is_finite_number(event.popularity):
            logger.debug(
                "Skipping non-numeric popularity %r on event %r",
                event.popularity,
                event.id,
            )
            return None
        return event.popularity * self.weight


def default_factors(
    similarity_weight: float = 0.35,
    preference_weight: float = 0.25,
    proximity_weight: float = 0.20,
    popularity_weight: float = 0.20,
    proximity_decay_km: float = 100.0,
) -> list[ScoringFactor]:
    return [
        SimilarityFactor(similarity_weight),
        PreferenceFactor(preference_weight),
        ProximityFactor(proximity_weight, proximity_decay_km),
        PopularityFactor(popularity_weight),
    ]
