"""Impact classification for ImpactIQ.

Maps ratings, ratios and counts onto the label and colour buckets used by
detail views, summaries and heatmaps. Two rating scales exist side by
side (overall 0-5 and standard 0-3); callers always name the one they mean.

All bands use inclusive lower bounds (value >= threshold).
"""

import numbers
from enum import Enum

from impactiq.config import SeverityRatioThresholds, settings
from impactiq.exceptions import ScaleMismatchError
from impactiq.models import ImpactBand, ImpactLevel, LoadIntensity, SeverityLevel


class RatingScale(str, Enum):
    """Which rating scale a value belongs to."""

    OVERALL = "overall"  # 0-5 overall impact rating
    STANDARD = "standard"  # 0-3 process / role / workload / system dimensions


OVERALL_RATING_LABELS: dict[int, str] = {
    0: "No Impact",
    1: "Very Low",
    2: "Low",
    3: "Medium",
    4: "High",
    5: "Critical",
}

SUB_RATING_LABELS: dict[int, str] = {
    0: "No Change",
    1: "Minor",
    2: "Moderate",
    3: "Major",
}

_LABELS_BY_SCALE: dict[RatingScale, dict[int, str]] = {
    RatingScale.OVERALL: OVERALL_RATING_LABELS,
    RatingScale.STANDARD: SUB_RATING_LABELS,
}

# (lower bound, band) checked top-down
_IMPACT_BANDS: tuple[tuple[float, ImpactBand], ...] = (
    (4.5, ImpactBand.CRITICAL),
    (3.5, ImpactBand.HIGH),
    (2.5, ImpactBand.MEDIUM),
    (1.5, ImpactBand.LOW),
)

_LOAD_BANDS: tuple[tuple[float, LoadIntensity], ...] = (
    (0.8, LoadIntensity.CRITICAL),
    (0.6, LoadIntensity.HIGH),
    (0.4, LoadIntensity.MEDIUM),
    (0.2, LoadIntensity.LOW),
)

_CHANGE_INTENSITY_BANDS: tuple[tuple[int, SeverityLevel], ...] = (
    (50, SeverityLevel.CRITICAL),
    (20, SeverityLevel.HIGH),
    (10, SeverityLevel.MEDIUM),
)

_TRAINING_URGENCY_BANDS: tuple[tuple[float, SeverityLevel], ...] = (
    (80, SeverityLevel.CRITICAL),
    (60, SeverityLevel.HIGH),
    (40, SeverityLevel.MEDIUM),
)


def classify_rating(rating: int, scale: RatingScale) -> str:
    """Label a single rating on an explicitly selected scale.

    Args:
        rating: Integer rating.
        scale: RatingScale.OVERALL (0-5) or RatingScale.STANDARD (0-3).

    Returns:
        Human-readable label.

    Raises:
        ScaleMismatchError: If scale is not a RatingScale, the rating is not an
            integer, or the rating lies outside the selected scale.
    """
    if not isinstance(scale, RatingScale):
        raise ScaleMismatchError(
            f"Unknown rating scale {scale!r}; use RatingScale.OVERALL or RatingScale.STANDARD",
            scale=str(scale),
            rating=rating,
        )
    if isinstance(rating, bool) or not isinstance(rating, numbers.Integral):
        raise ScaleMismatchError(
            f"Rating must be an integer, got {rating!r}",
            scale=scale.value,
            rating=rating,
        )

    labels = _LABELS_BY_SCALE[scale]
    label = labels.get(int(rating))
    if label is None:
        raise ScaleMismatchError(
            f"Rating {rating} is outside the {scale.value} scale "
            f"({min(labels)}-{max(labels)})",
            scale=scale.value,
            rating=rating,
        )
    return label


def classify_overall_rating(rating: int) -> str:
    """Label a 0-5 overall impact rating."""
    return classify_rating(rating, RatingScale.OVERALL)


def classify_sub_rating(rating: int) -> str:
    """Label a 0-3 process / role / workload / system sub-rating."""
    return classify_rating(rating, RatingScale.STANDARD)


def classify_severity_by_ratio(
    count_at_or_above_threshold: int,
    total: int,
    thresholds: SeverityRatioThresholds | None = None,
) -> SeverityLevel:
    """Portfolio severity from the share of high-impact processes.

    Args:
        count_at_or_above_threshold: Processes rated at or above the
            high-impact threshold.
        total: Processes in the portfolio.
        thresholds: Override for settings.severity_ratio_thresholds.

    Returns:
        SeverityLevel.NONE for an empty portfolio, otherwise the band whose
        lower bound the ratio meets (critical >= 0.5, high >= 0.3,
        medium >= 0.1, else low with default thresholds).
    """
    if total <= 0:
        return SeverityLevel.NONE

    thresholds = thresholds or settings.severity_ratio_thresholds
    ratio = count_at_or_above_threshold / total
    if ratio >= thresholds.critical:
        return SeverityLevel.CRITICAL
    if ratio >= thresholds.high:
        return SeverityLevel.HIGH
    if ratio >= thresholds.medium:
        return SeverityLevel.MEDIUM
    return SeverityLevel.LOW


def classify_impact_band(rating: float | None) -> ImpactBand:
    """Heatmap band for an overall rating or an average of overall ratings."""
    if not rating:
        return ImpactBand.NONE
    for lower_bound, band in _IMPACT_BANDS:
        if rating >= lower_bound:
            return band
    return ImpactBand.MINIMAL


def classify_impact_level(rating: int, high_threshold: int | None = None) -> ImpactLevel:
    """Three-way bucket: high (>= high threshold, 4 by default), medium (>= 2), low."""
    if high_threshold is None:
        high_threshold = settings.high_impact_threshold
    if rating >= high_threshold:
        return ImpactLevel.HIGH
    if rating >= 2:
        return ImpactLevel.MEDIUM
    return ImpactLevel.LOW


def classify_load_intensity(load: int, max_load: int) -> LoadIntensity:
    """How loaded a role is relative to the most loaded role."""
    if max_load <= 0:
        return LoadIntensity.NONE
    ratio = load / max_load
    for lower_bound, band in _LOAD_BANDS:
        if ratio >= lower_bound:
            return band
    return LoadIntensity.MINIMAL


def classify_change_intensity(change_count: int) -> SeverityLevel:
    """Dashboard intensity of the number of RACI changes in an assessment."""
    for lower_bound, level in _CHANGE_INTENSITY_BANDS:
        if change_count >= lower_bound:
            return level
    return SeverityLevel.LOW


def classify_training_urgency(percentage: float) -> SeverityLevel:
    """Urgency of the training effort from the % of processes needing training."""
    for lower_bound, level in _TRAINING_URGENCY_BANDS:
        if percentage >= lower_bound:
            return level
    return SeverityLevel.LOW
