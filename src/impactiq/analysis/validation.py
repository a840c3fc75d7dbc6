"""Form-level validation for ImpactIQ.

These checks return a list of human-readable messages (empty = valid)
instead of raising, so a form can show every problem at once.
"""

import logging
from collections.abc import Iterable, Mapping

from impactiq.models import (
    SUB_RATING_FIELDS,
    ImpactDirection,
    ProcessNode,
    RACIRole,
    StakeholderRACI,
    WorkloadDirection,
)
from impactiq.models.impact import (
    OVERALL_RATING_MAX,
    SUB_RATING_MAX,
    SUB_RATING_MIN,
    coerce_rating_value,
)

logger = logging.getLogger(__name__)

MAX_HIERARCHY_LEVEL = 3

_STATE_LABELS = {"as_is": "As-Is", "to_be": "To-Be"}


def validate_impact_ratings(ratings: Mapping[str, object]) -> list[str]:
    """Check sub-ratings, overall rating and directions of a rating form.

    Absent values are not errors; they count as 0 later on.

    Args:
        ratings: Raw form values keyed by ProcessImpact field name.

    Returns:
        Validation messages, empty when the input is valid.
    """
    errors: list[str] = []

    for name in SUB_RATING_FIELDS:
        value = coerce_rating_value(ratings.get(name))
        if value is not None and not SUB_RATING_MIN <= value <= SUB_RATING_MAX:
            label = name.removesuffix("_rating").replace("_", " ").capitalize()
            errors.append(
                f"{label} rating must be between {SUB_RATING_MIN} and {SUB_RATING_MAX}"
            )

    overall = coerce_rating_value(ratings.get("overall_impact_rating"))
    if overall is not None and not 0 <= overall <= OVERALL_RATING_MAX:
        errors.append(f"Overall impact rating must be between 0 and {OVERALL_RATING_MAX}")

    workload_direction = ratings.get("workload_direction")
    if workload_direction and workload_direction not in {d.value for d in WorkloadDirection}:
        errors.append("Workload direction must be increase, decrease, or neutral")

    impact_direction = ratings.get("impact_direction")
    if impact_direction and impact_direction not in {d.value for d in ImpactDirection}:
        errors.append("Impact direction must be positive, negative, or neutral")

    if errors:
        logger.debug("Rating validation failed: %s", errors)
    return errors


def validate_raci_assignments(assignments: Iterable[StakeholderRACI]) -> list[str]:
    """Check structured RACI rows for one process.

    Rules per state (As-Is, To-Be): at most one Accountable stakeholder,
    and when exactly one is Accountable at least one must be Responsible.
    An empty assignment list is valid.
    """
    assignments = list(assignments)
    errors: list[str] = []
    if not assignments:
        return errors

    for state, label in _STATE_LABELS.items():
        accountable = [a for a in assignments if a.has_role(state, RACIRole.ACCOUNTABLE)]
        if len(accountable) > 1:
            errors.append(f"Only one stakeholder can be Accountable in {label} state")
        elif len(accountable) == 1 and not any(
            a.has_role(state, RACIRole.RESPONSIBLE) for a in assignments
        ):
            errors.append(
                "At least one stakeholder must be Responsible when Accountable "
                f"is assigned in {label} state"
            )

    return errors


def validate_process_hierarchy(
    node: ProcessNode,
    existing: Iterable[ProcessNode] = (),
) -> list[str]:
    """Check a process before it is added to (or updated in) a hierarchy.

    Args:
        node: The process being saved.
        existing: Processes already in the same assessment.

    Returns:
        Validation messages, empty when the process can be saved.
    """
    existing = list(existing)
    errors: list[str] = []

    if not node.process_code:
        errors.append("Process code is required")
    if not node.process_name:
        errors.append("Process name is required")
    if not 0 <= node.level_number <= MAX_HIERARCHY_LEVEL:
        errors.append(f"Level must be between 0 and {MAX_HIERARCHY_LEVEL}")

    duplicate = next(
        (
            p
            for p in existing
            if p.id != node.id and node.process_code and p.process_code == node.process_code
        ),
        None,
    )
    if duplicate is not None:
        errors.append("Process code already exists in this assessment")

    if node.parent_id:
        parent = next((p for p in existing if p.id == node.parent_id), None)
        if parent is None:
            errors.append("Selected parent process not found")
        elif parent.level_number >= node.level_number:
            errors.append("Parent process must be at a higher level (lower number)")
    elif node.level_number > 0:
        errors.append("Processes below L0 must have a parent")

    return errors
