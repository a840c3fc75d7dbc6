"""Overall impact rating calculation for ImpactIQ.

Pure algorithmic logic. Combines the five 0-3 sub-ratings of a process
into the 0-5 overall impact rating shown on every assessment screen.

The overall rating is always derived: callers never set it, and analysis
code never trusts a stored value (see effective_rating).
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

from impactiq.models import SUB_RATING_FIELDS, ImpactRatings, ProcessImpact
from impactiq.models.impact import SUB_RATING_MAX, clamp_sub_rating

logger = logging.getLogger(__name__)

MAX_POINTS = SUB_RATING_MAX * len(SUB_RATING_FIELDS)  # 15

# (highest total_points, overall rating); anything above the last bound is 5
_POINT_BANDS: tuple[tuple[int, int], ...] = (
    (0, 0),  # No Impact
    (2, 1),  # Low
    (5, 2),  # Medium
    (8, 3),  # High
    (11, 4),  # Very High
)
_TOP_RATING = 5  # Critical (12-15 points)

OVERALL_DESCRIPTIONS: dict[int, str] = {
    0: "No Impact",
    1: "Low Impact",
    2: "Medium Impact",
    3: "High Impact",
    4: "Very High Impact",
    5: "Critical Impact",
}

RatingsInput = ImpactRatings | ProcessImpact | Mapping[str, object] | None


@dataclass(frozen=True)
class ImpactBreakdown:
    """Overall rating with the points that produced it, for display."""

    total_points: int
    max_points: int
    overall_rating: int
    description: str

    @property
    def breakdown(self) -> str:
        """E.g. '6/15 points = High Impact'."""
        return f"{self.total_points}/{self.max_points} points = {self.description}"


def _as_ratings(ratings: RatingsInput) -> ImpactRatings:
    if ratings is None:
        return ImpactRatings.empty()
    if isinstance(ratings, ImpactRatings):
        return ratings
    if isinstance(ratings, ProcessImpact):
        return ratings.ratings
    return ImpactRatings.from_mapping(dict(ratings))


def normalize_ratings(
    ratings: RatingsInput,
    policy: Literal["clamp", "reject"] | None = None,
) -> dict[str, int]:
    """Turn any ratings input into five in-range integers.

    This is the single normalization step: unset or non-numeric values
    become 0 and out-of-range values are clamped (or rejected).

    Args:
        ratings: ImpactRatings, ProcessImpact, a raw row mapping, or None.
        policy: Override for settings.out_of_range_policy.

    Returns:
        Mapping of sub-rating field name to an int in 0-3.
    """
    parsed = _as_ratings(ratings)
    normalized: dict[str, int] = {}
    for name in SUB_RATING_FIELDS:
        value = getattr(parsed, name)
        normalized[name] = 0 if value is None else clamp_sub_rating(name, value, policy)
    return normalized


def total_points(ratings: RatingsInput) -> int:
    """Sum of the five normalized sub-ratings (0-15)."""
    return sum(normalize_ratings(ratings).values())


def rating_for_points(points: int) -> int:
    """Map a 0-15 points total onto the 0-5 overall scale."""
    for upper_bound, rating in _POINT_BANDS:
        if points <= upper_bound:
            return rating
    return _TOP_RATING


def calculate_overall_impact_rating(ratings: RatingsInput) -> int:
    """Calculate the 0-5 overall impact rating from the five sub-ratings.

    Pure and idempotent; monotonic non-decreasing in every sub-rating.

    Args:
        ratings: ImpactRatings, ProcessImpact, a raw row mapping, or None.
            Missing or non-numeric sub-ratings count as 0.

    Returns:
        Overall impact rating (0 = No Impact ... 5 = Critical).
    """
    return rating_for_points(total_points(ratings))


def get_overall_impact_breakdown(ratings: RatingsInput) -> ImpactBreakdown:
    """Overall rating together with its points total and description."""
    points = total_points(ratings)
    overall = rating_for_points(points)
    return ImpactBreakdown(
        total_points=points,
        max_points=MAX_POINTS,
        overall_rating=overall,
        description=OVERALL_DESCRIPTIONS[overall],
    )


def effective_rating(impact: ProcessImpact) -> int:
    """Overall rating recomputed from the impact's own sub-ratings.

    Every analysis function uses this instead of the stored
    overall_impact_rating, which may be stale.
    """
    rating = calculate_overall_impact_rating(impact)
    if rating != impact.overall_impact_rating:
        logger.debug(
            "Process %s: stored overall rating %d differs from computed %d",
            impact.process_id,
            impact.overall_impact_rating,
            rating,
        )
    return rating


def refresh_overall_rating(impact: ProcessImpact) -> ProcessImpact:
    """Return a copy of the impact with its overall rating recomputed."""
    rating = calculate_overall_impact_rating(impact)
    if rating == impact.overall_impact_rating:
        return impact
    logger.warning(
        "Process %s: overwriting stale overall rating %d with %d",
        impact.process_id,
        impact.overall_impact_rating,
        rating,
    )
    return impact.model_copy(update={"overall_impact_rating": rating})
