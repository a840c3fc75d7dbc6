"""Tests for impactiq.models.impact."""

import logging
import math

import pytest
from pydantic import ValidationError

from impactiq import config
from impactiq.exceptions import RatingOutOfRangeError
from impactiq.models import (
    ImpactDirection,
    ImpactRatings,
    PriorityLevel,
    ProcessImpact,
    ProcessNode,
    RACIRole,
    WorkloadDirection,
)
from impactiq.models.impact import coerce_rating_value


class TestCoerceRatingValue:
    def test_int(self):
        assert coerce_rating_value(2) == 2

    def test_float_truncated(self):
        assert coerce_rating_value(2.7) == 2

    def test_numeric_text(self):
        assert coerce_rating_value("3") == 3
        assert coerce_rating_value(" 2.5 ") == 2
        assert coerce_rating_value("3 - major") == 3

    def test_negative_text(self):
        assert coerce_rating_value("-1") == -1

    def test_unparsable(self):
        assert coerce_rating_value("high") is None
        assert coerce_rating_value("") is None
        assert coerce_rating_value([1]) is None

    def test_none_nan_and_bool(self):
        assert coerce_rating_value(None) is None
        assert coerce_rating_value(math.nan) is None
        assert coerce_rating_value(math.inf) is None
        assert coerce_rating_value(True) is None

    def test_out_of_range_kept(self):
        assert coerce_rating_value(7) == 7


class TestImpactRatings:
    def test_fields_are_required(self):
        with pytest.raises(ValidationError):
            ImpactRatings(process_rating=1)

    def test_nullable(self):
        ratings = ImpactRatings.empty()
        assert ratings.process_rating is None
        assert ratings.system_complexity_rating is None

    def test_coerces_text(self):
        ratings = ImpactRatings.from_mapping({"process_rating": "2", "role_rating": "n/a"})
        assert ratings.process_rating == 2
        assert ratings.role_rating is None

    def test_from_mapping_ignores_extra_keys(self):
        ratings = ImpactRatings.from_mapping({"workload_rating": 1, "comments": "x"})
        assert ratings.workload_rating == 1
        assert ratings.new_role_rating is None

    def test_not_range_checked(self):
        ratings = ImpactRatings.from_mapping({"process_rating": 9})
        assert ratings.process_rating == 9


class TestProcessImpactDefaults:
    def test_minimal(self):
        impact = ProcessImpact(process_id="p1")
        assert impact.process_rating == 0
        assert impact.overall_impact_rating == 0
        assert impact.workload_direction == WorkloadDirection.NEUTRAL
        assert impact.impact_direction == ImpactDirection.NEUTRAL
        assert impact.priority == PriorityLevel.MEDIUM
        assert impact.as_is_raci_r == ""
        assert impact.as_is_system is None

    def test_process_id_required(self):
        with pytest.raises(ValidationError):
            ProcessImpact(process_id="")

    def test_missing_ratings_become_zero(self):
        impact = ProcessImpact(process_id="p1", process_rating=None, role_rating="n/a")
        assert impact.process_rating == 0
        assert impact.role_rating == 0

    def test_out_of_range_rating_clamped(self, monkeypatch, caplog):
        monkeypatch.setattr(config.settings, "out_of_range_policy", "clamp")
        with caplog.at_level(logging.WARNING, logger="impactiq"):
            impact = ProcessImpact(process_id="p1", workload_rating=4, role_rating="-1")
        assert impact.workload_rating == 3
        assert impact.role_rating == 0
        assert "workload_rating" in caplog.text

    def test_out_of_range_rating_rejected(self, monkeypatch):
        monkeypatch.setattr(config.settings, "out_of_range_policy", "reject")
        with pytest.raises(RatingOutOfRangeError) as exc_info:
            ProcessImpact(process_id="p1", workload_rating=4)
        assert exc_info.value.field == "workload_rating"

    def test_in_range_rating_kept_under_reject(self, monkeypatch):
        monkeypatch.setattr(config.settings, "out_of_range_policy", "reject")
        assert ProcessImpact(process_id="p1", workload_rating=3).workload_rating == 3

    def test_overall_range_enforced(self):
        with pytest.raises(ValidationError):
            ProcessImpact(process_id="p1", overall_impact_rating=6)


class TestProcessImpactNormalization:
    def test_raci_none_is_empty(self):
        impact = ProcessImpact(process_id="p1", as_is_raci_r=None, to_be_raci_a="  CFO ")
        assert impact.as_is_raci_r == ""
        assert impact.to_be_raci_a == "CFO"

    def test_blank_system_is_none(self):
        impact = ProcessImpact(process_id="p1", as_is_system="  ", to_be_system="SAP")
        assert impact.as_is_system is None
        assert impact.to_be_system == "SAP"

    def test_blank_enum_uses_default(self):
        impact = ProcessImpact(process_id="p1", workload_direction="", priority=None)
        assert impact.workload_direction == WorkloadDirection.NEUTRAL
        assert impact.priority == PriorityLevel.MEDIUM

    def test_enum_case_insensitive(self):
        impact = ProcessImpact(process_id="p1", impact_direction="Positive")
        assert impact.impact_direction == ImpactDirection.POSITIVE

    def test_enum_instance_passes_through(self):
        impact = ProcessImpact(process_id="p1", priority=PriorityLevel.CRITICAL)
        assert impact.priority == PriorityLevel.CRITICAL

    def test_invalid_enum_rejected(self):
        with pytest.raises(ValidationError):
            ProcessImpact(process_id="p1", workload_direction="sideways")


class TestProcessImpactProperties:
    def test_ratings(self):
        impact = ProcessImpact(process_id="p1", process_rating=2, system_complexity_rating=3)
        ratings = impact.ratings
        assert ratings.process_rating == 2
        assert ratings.role_rating == 0
        assert ratings.system_complexity_rating == 3

    def test_process_code_from_hierarchy(self):
        node = ProcessNode(id="p1", process_code="1.2", process_name="Payment Run", level_number=1)
        impact = ProcessImpact(process_id="p1", process=node)
        assert impact.process_code == "1.2"
        assert impact.process_name == "Payment Run"
        assert impact.level_number == 1

    def test_process_code_falls_back_to_id(self):
        impact = ProcessImpact(process_id="p1")
        assert impact.process_code == "p1"
        assert impact.process_name == ""
        assert impact.level_number is None
        assert impact.department is None

    def test_has_system_change(self):
        assert ProcessImpact(process_id="p1", as_is_system="A", to_be_system="B").has_system_change
        assert not ProcessImpact(process_id="p1", as_is_system="A", to_be_system="A").has_system_change
        assert not ProcessImpact(process_id="p1").has_system_change

    def test_raci_pair(self):
        impact = ProcessImpact(process_id="p1", as_is_raci_c="Buyer", to_be_raci_c="Category Manager")
        assert impact.raci_pair(RACIRole.CONSULTED) == ("Buyer", "Category Manager")
        assert impact.raci_pair("c") == ("Buyer", "Category Manager")
        assert impact.raci_pair("R") == ("", "")

    def test_has_any_raci(self):
        assert not ProcessImpact(process_id="p1").has_any_raci
        assert ProcessImpact(process_id="p1", to_be_raci_i="Controller").has_any_raci
