"""Ordering of optimization recommendations."""

import logging
import math
import re
from collections.abc import Callable, Sequence

from ..exceptions import ValidationError
from .models import LiftValue, Recommendation

logger = logging.getLogger(__name__)

# "+15% CTR", "-3.5 % ROAS", "8% Open Rate", "12%"
LIFT_PATTERN = re.compile(
    r"^\s*(?P<sign>[+\-−])?\s*(?P<number>\d+(?:\.\d+)?|\.\d+)\s*%\s*(?P<unit>.*?)\s*$"
)

RankingPolicy = Callable[[Sequence[Recommendation]], list[Recommendation]]


def parse_lift(text: str) -> LiftValue:
    """Parse a signed percentage with an optional unit suffix.

    Never raises; unparsable input yields a LiftValue with percent=None.
    """
    match = LIFT_PATTERN.match(text) if isinstance(text, str) else None
    if match is None:
        return LiftValue(raw=str(text), percent=None, unit=None)

    percent = float(match["number"])
    if match["sign"] in ("-", "−"):
        percent = -percent
    if not math.isfinite(percent):
        return LiftValue(raw=text, percent=None, unit=None)

    return LiftValue(raw=text, percent=percent, unit=match["unit"] or None)


def identity_policy(records: Sequence[Recommendation]) -> list[Recommendation]:
    """Keep insertion order."""
    return list(records)


def lift_magnitude_policy(records: Sequence[Recommendation]) -> list[Recommendation]:
    """Highest parsed lift first; unparsable lifts rank lowest.

    Ties keep insertion order.
    """
    keyed = []
    for rec in records:
        lift = parse_lift(rec.projected_lift)
        if not lift.is_parsed:
            logger.warning(
                "Unparsable lift %r on recommendation %s, ranking it last",
                rec.projected_lift,
                rec.id,
            )
        keyed.append((lift.percent if lift.is_parsed else -math.inf, rec))

    # Stable sort: equal lifts keep input order
    return [rec for _, rec in sorted(keyed, key=lambda item: item[0], reverse=True)]


class RecommendationRanker:
    """Applies a ranking policy to recommendation records.

    Usage:
        ranker = RecommendationRanker(policy=lift_magnitude_policy)
        ordered = ranker.rank(recommendations)
    """

    def __init__(self, policy: RankingPolicy | None = None):
        self.policy = policy or identity_policy

    def rank(self, records: Sequence[Recommendation]) -> list[Recommendation]:
        """Order records with the configured policy.

        Raises:
            ValidationError: If two records share an id
        """
        seen: set[int] = set()
        for rec in records:
            if rec.id in seen:
                raise ValidationError(f"Duplicate recommendation id: {rec.id}")
            seen.add(rec.id)

        return self.policy(records)
