"""
Event Recommendation Engine
===========================

1. **Exclusion**  -- events the user already attended are dropped before
   scoring and never returned.
2. **Scoring**    -- every remaining candidate gets the sum of the
   applicable weighted factors (see ``scoring``).
3. **Ranking**    -- stable sort by descending score; ties keep the
   caller's input order.
4. **Slicing**    -- the first ``limit`` events are returned.  A zero or
   negative limit returns an empty list.

The engine is stateless between calls and never mutates its inputs.  It
accepts :class:`Event` / :class:`User` instances or raw mappings, and
always hands back the caller's own event objects.

Complexity
----------
Let E = candidate events, U = attended events.

* Scoring:  O(E x U)
* Ranking:  O(E log E)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from eventrec.config import Settings, settings as default_settings

from .entities import Event, EventId, ScoredEvent, User, is_hashable
from .scoring import (
    ProximityFactor,
    ScoringContext,
    ScoringFactor,
    default_factors,
)

logger = logging.getLogger(__name__)

SimilarityIndex = Mapping[EventId, Sequence[EventId]]


class Recommender:
    """High-level API: score, rank and pick the top events for a user."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        factors: Optional[list[ScoringFactor]] = None,
    ):
        self.settings = settings or default_settings
        if factors is None:
            factors = default_factors(
                similarity_weight=self.settings.similarity_weight,
                preference_weight=self.settings.preference_weight,
                proximity_weight=self.settings.proximity_weight,
                popularity_weight=self.settings.popularity_weight,
                proximity_decay_km=self.settings.proximity_decay_km,
            )
        self.factors = factors

    def _score(self, context: ScoringContext, event: Event, original: Any) -> ScoredEvent:
        scored = ScoredEvent(event=original)
        for factor in self.factors:
            if isinstance(factor, ProximityFactor):
                measured = factor.measure(context, event)
                if measured is None:
                    continue
                scored.distance_km, value = measured
            else:
                value = factor.contribute(context, event)
                if value is None:
                    continue
            scored.breakdown[factor.name] = value
            scored.score += value
        return scored

    def score(
        self,
        user: Any,
        event: Any,
        similarity: Optional[SimilarityIndex] = None,
    ) -> ScoredEvent:
        """Score a single event; attendance exclusion does not apply."""
        context = ScoringContext.build(User.from_dict(user), similarity)
        return self._score(context, Event.from_dict(event), event)

    def rank(
        self,
        user: Any,
        events: Optional[Sequence[Any]],
        similarity: Optional[SimilarityIndex] = None,
        limit: Optional[int] = None,
    ) -> list[ScoredEvent]:
        """Top ``limit`` candidates with their scores, best first."""
        if not events:
            return []
        if limit is None:
            limit = self.settings.default_limit

        context = ScoringContext.build(User.from_dict(user), similarity)

        scored: list[ScoredEvent] = []
        excluded = 0
        for original in events:
            event = Event.from_dict(original)
            attended = (
                event.id is not None
                and is_hashable(event.id)
                and event.id in context.attended_set
            )
            if attended:
                excluded += 1
                continue
            scored.append(self._score(context, event, original))

        # sorted() is stable with reverse=True, so ties keep input order
        ranked = sorted(scored, key=lambda s: s.score, reverse=True)
        top = ranked[: max(limit, 0)]

        logger.debug(
            "Scored %d candidates (%d already attended), returning %d",
            len(scored),
            excluded,
            len(top),
        )
        return top

    def recommend(
        self,
        user: Any,
        events: Optional[Sequence[Any]],
        similarity: Optional[SimilarityIndex] = None,
        limit: Optional[int] = None,
    ) -> list[Any]:
        return [s.event for s in self.rank(user, events, similarity, limit)]


def recommend(
    user: Any,
    events: Optional[Sequence[Any]],
    similarity: Optional[SimilarityIndex] = None,
    limit: int = 5,
) -> list[Any]:
    """Rank *events* for *user* and return at most *limit* of them.

    Uses the weights from the environment settings.
    """
    return Recommender().recommend(user, events, similarity, limit)
