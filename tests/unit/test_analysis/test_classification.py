"""Tests for impactiq.analysis.classification."""

import pytest

from impactiq.analysis.classification import (
    RatingScale,
    classify_change_intensity,
    classify_impact_band,
    classify_impact_level,
    classify_load_intensity,
    classify_overall_rating,
    classify_rating,
    classify_severity_by_ratio,
    classify_sub_rating,
    classify_training_urgency,
)
from impactiq.config import SeverityRatioThresholds
from impactiq.exceptions import ScaleMismatchError
from impactiq.models import ImpactBand, ImpactLevel, LoadIntensity, SeverityLevel


class TestClassifyRating:
    def test_overall_labels(self):
        assert [classify_overall_rating(r) for r in range(6)] == [
            "No Impact",
            "Very Low",
            "Low",
            "Medium",
            "High",
            "Critical",
        ]

    def test_sub_rating_labels(self):
        assert [classify_sub_rating(r) for r in range(4)] == [
            "No Change",
            "Minor",
            "Moderate",
            "Major",
        ]

    def test_explicit_scale(self):
        assert classify_rating(3, RatingScale.OVERALL) == "Medium"
        assert classify_rating(3, RatingScale.STANDARD) == "Major"

    def test_overall_value_on_standard_scale(self):
        with pytest.raises(ScaleMismatchError) as exc_info:
            classify_sub_rating(5)
        assert exc_info.value.scale == "standard"
        assert exc_info.value.rating == 5

    def test_negative_rating(self):
        with pytest.raises(ScaleMismatchError):
            classify_overall_rating(-1)

    def test_unknown_scale(self):
        with pytest.raises(ScaleMismatchError):
            classify_rating(2, "overall")  # type: ignore[arg-type]

    @pytest.mark.parametrize("rating", [2.5, "2", True, None])
    def test_non_integer_rating(self, rating):
        with pytest.raises(ScaleMismatchError):
            classify_rating(rating, RatingScale.OVERALL)


class TestClassifySeverityByRatio:
    def test_empty_portfolio(self):
        assert classify_severity_by_ratio(0, 0) == SeverityLevel.NONE

    @pytest.mark.parametrize(
        ("count", "total", "expected"),
        [
            (5, 10, SeverityLevel.CRITICAL),
            (4, 10, SeverityLevel.HIGH),
            (1, 10, SeverityLevel.MEDIUM),
            (0, 10, SeverityLevel.LOW),
            (1, 20, SeverityLevel.LOW),
        ],
    )
    def test_bands(self, count, total, expected):
        assert classify_severity_by_ratio(count, total) == expected

    def test_boundary_is_inclusive(self):
        # Every band uses >=, so exactly 30% lands in "high"
        assert classify_severity_by_ratio(3, 10) == SeverityLevel.HIGH

    def test_custom_thresholds(self):
        thresholds = SeverityRatioThresholds(critical=0.9, high=0.6, medium=0.2)
        assert classify_severity_by_ratio(5, 10, thresholds) == SeverityLevel.MEDIUM


class TestClassifyImpactBand:
    @pytest.mark.parametrize(
        ("rating", "expected"),
        [
            (None, ImpactBand.NONE),
            (0, ImpactBand.NONE),
            (1, ImpactBand.MINIMAL),
            (1.5, ImpactBand.LOW),
            (2.4, ImpactBand.LOW),
            (2.5, ImpactBand.MEDIUM),
            (3.5, ImpactBand.HIGH),
            (4.5, ImpactBand.CRITICAL),
            (5, ImpactBand.CRITICAL),
        ],
    )
    def test_bands(self, rating, expected):
        assert classify_impact_band(rating) == expected


class TestClassifyImpactLevel:
    def test_default_threshold(self):
        assert classify_impact_level(4) == ImpactLevel.HIGH
        assert classify_impact_level(3) == ImpactLevel.MEDIUM
        assert classify_impact_level(2) == ImpactLevel.MEDIUM
        assert classify_impact_level(1) == ImpactLevel.LOW

    def test_custom_threshold(self):
        assert classify_impact_level(3, high_threshold=3) == ImpactLevel.HIGH


class TestClassifyLoadIntensity:
    def test_no_load(self):
        assert classify_load_intensity(0, 0) == LoadIntensity.NONE

    @pytest.mark.parametrize(
        ("load", "expected"),
        [
            (10, LoadIntensity.CRITICAL),
            (8, LoadIntensity.CRITICAL),
            (6, LoadIntensity.HIGH),
            (4, LoadIntensity.MEDIUM),
            (2, LoadIntensity.LOW),
            (1, LoadIntensity.MINIMAL),
        ],
    )
    def test_relative_to_max(self, load, expected):
        assert classify_load_intensity(load, 10) == expected


class TestDashboardIntensity:
    def test_change_intensity(self):
        assert classify_change_intensity(50) == SeverityLevel.CRITICAL
        assert classify_change_intensity(20) == SeverityLevel.HIGH
        assert classify_change_intensity(10) == SeverityLevel.MEDIUM
        assert classify_change_intensity(9) == SeverityLevel.LOW

    def test_training_urgency(self):
        assert classify_training_urgency(80) == SeverityLevel.CRITICAL
        assert classify_training_urgency(60) == SeverityLevel.HIGH
        assert classify_training_urgency(40) == SeverityLevel.MEDIUM
        assert classify_training_urgency(39.9) == SeverityLevel.LOW
