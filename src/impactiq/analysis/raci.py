"""RACI change analysis for ImpactIQ.

Pure algorithmic logic. Compares the As-Is and To-Be free-text RACI fields
of each process, classifies every difference, prioritizes it, and
aggregates how much each named role is loaded across an assessment.

RACI text is a comma-separated list of role codes ("AM, DC"). Malformed
text (stray commas, blanks) degrades to fewer roles, never to an error.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from impactiq.analysis.rating import effective_rating
from impactiq.config import ChangeWeights, PriorityThresholds, settings
from impactiq.models import (
    ChangeType,
    PriorityLevel,
    ProcessImpact,
    RACIChangeRecord,
    RACIRole,
    RoleLoad,
    StakeholderRACI,
)

logger = logging.getLogger(__name__)

# Order in which phases are scheduled in the change timeline
PRIORITY_ORDER: tuple[PriorityLevel, ...] = (
    PriorityLevel.CRITICAL,
    PriorityLevel.HIGH,
    PriorityLevel.MEDIUM,
    PriorityLevel.LOW,
)

WEEKS_PER_PHASE = 2

# Parent process rating from which a change counts as high impact / critical
HIGH_IMPACT_CHANGE_RATING = 2
CRITICAL_CHANGE_RATING = 3

NO_ROLE_TEXT = "No role"
NO_RACI_TEXT = "No RACI"


@dataclass
class RoleImpactAnalysis:
    """Role load and RACI changes across a set of processes."""

    role_load: list[RoleLoad]
    changes: list[RACIChangeRecord]
    change_type_summary: dict[ChangeType, int]

    @property
    def total_changes(self) -> int:
        return len(self.changes)


@dataclass
class ChangePhase:
    """One phase of the RACI change rollout, grouping changes of one priority."""

    phase: int
    priority: PriorityLevel
    changes: list[RACIChangeRecord] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"Phase {self.phase}: {self.priority.value.capitalize()} Priority"

    @property
    def estimated_weeks(self) -> int:
        return self.phase * WEEKS_PER_PHASE


@dataclass
class ProcessChanges:
    """All RACI changes of one process."""

    process_id: str
    process_code: str = ""
    process_name: str = ""
    changes: list[RACIChangeRecord] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        return len(self.changes)

    @property
    def highest_priority(self) -> PriorityLevel | None:
        if not self.changes:
            return None
        priorities = {c.priority for c in self.changes}
        return next(p for p in PRIORITY_ORDER if p in priorities)


@dataclass
class ChangeTrackingSummary:
    """Headline counts of the responsibility change tracking view."""

    total_changes: int
    processes_affected: int
    high_impact_changes: int
    critical_changes: int
    changes_by_priority: dict[PriorityLevel, int]


def split_roles(value: str | None) -> list[str]:
    """Split a free-text RACI value into role codes.

    Tokens are trimmed and empty tokens dropped, so "AM, ,DC," gives
    ["AM", "DC"]. Order and duplicates are preserved.
    """
    if not value:
        return []
    return [token.strip() for token in value.split(",") if token.strip()]


def diff_raci_field(as_is: str | None, to_be: str | None) -> ChangeType:
    """Classify the difference between the As-Is and To-Be value of one RACI field.

    None and blank strings both mean "no role present". Rules, in order:
    empty -> non-empty is a new assignment, non-empty -> empty a removed
    assignment, equal after trimming no change, anything else a role change.
    """
    as_is_text = (as_is or "").strip()
    to_be_text = (to_be or "").strip()

    if not as_is_text and to_be_text:
        return ChangeType.NEW_ASSIGNMENT
    if as_is_text and not to_be_text:
        return ChangeType.REMOVED_ASSIGNMENT
    if as_is_text == to_be_text:
        return ChangeType.NO_CHANGE
    return ChangeType.ROLE_CHANGE


def has_raci_change(
    impact: ProcessImpact,
    roles: Iterable[RACIRole] = tuple(RACIRole),
) -> bool:
    """Whether any of the given RACI letters differs between As-Is and To-Be."""
    return any(
        diff_raci_field(*impact.raci_pair(role)) != ChangeType.NO_CHANGE for role in roles
    )


def change_weight(change_type: ChangeType, weights: ChangeWeights | None = None) -> int:
    """Priority weight of a change type (no-change weighs nothing)."""
    weights = weights or settings.change_weights
    return {
        ChangeType.NEW_ASSIGNMENT: weights.new_assignment,
        ChangeType.ROLE_CHANGE: weights.role_change,
        ChangeType.REMOVED_ASSIGNMENT: weights.removed_assignment,
        ChangeType.NO_CHANGE: 0,
    }[change_type]


def compute_priority(
    impact_rating: int,
    weight: int,
    thresholds: PriorityThresholds | None = None,
) -> PriorityLevel:
    """Bucket impact rating + change weight into a priority.

    Used both for single RACI changes and for whole processes so the two
    never disagree. Defaults: >= 7 critical, >= 5 high, >= 3 medium, else low.
    """
    thresholds = thresholds or settings.priority_thresholds
    total_score = (impact_rating or 0) + (weight or 0)
    if total_score >= thresholds.critical:
        return PriorityLevel.CRITICAL
    if total_score >= thresholds.high:
        return PriorityLevel.HIGH
    if total_score >= thresholds.medium:
        return PriorityLevel.MEDIUM
    return PriorityLevel.LOW


def analyze_process(
    impact: ProcessImpact,
    weights: ChangeWeights | None = None,
    thresholds: PriorityThresholds | None = None,
) -> list[RACIChangeRecord]:
    """Detect the RACI changes of one process.

    Args:
        impact: The process impact to analyze.
        weights: Override for settings.change_weights.
        thresholds: Override for settings.priority_thresholds.

    Returns:
        One record per changed RACI letter, in R, A, C, I order. Unchanged
        letters produce nothing.
    """
    rating = effective_rating(impact)
    records: list[RACIChangeRecord] = []

    for role in RACIRole:
        as_is, to_be = impact.raci_pair(role)
        change_type = diff_raci_field(as_is, to_be)
        if change_type == ChangeType.NO_CHANGE:
            continue

        record = RACIChangeRecord(
            process_id=impact.process_id,
            process_code=impact.process_code,
            process_name=impact.process_name,
            role=role,
            as_is_value=as_is,
            to_be_value=to_be,
            change_type=change_type,
            impact_rating=rating,
            priority=compute_priority(
                rating, change_weight(change_type, weights), thresholds
            ),
        )
        logger.debug(
            "Process %s %s: %r -> %r (%s, %s)",
            record.process_code,
            role.value,
            as_is,
            to_be,
            change_type.value,
            record.priority.value,
        )
        records.append(record)

    return records


def prioritize_process(
    impact: ProcessImpact,
    weights: ChangeWeights | None = None,
    thresholds: PriorityThresholds | None = None,
) -> PriorityLevel | None:
    """Priority of a whole process from its heaviest RACI change.

    Returns:
        None when the process has no RACI change.
    """
    records = analyze_process(impact, weights, thresholds)
    if not records:
        return None
    heaviest = max(change_weight(r.change_type, weights) for r in records)
    return compute_priority(effective_rating(impact), heaviest, thresholds)


def analyze_changes(
    impacts: Iterable[ProcessImpact],
    weights: ChangeWeights | None = None,
    thresholds: PriorityThresholds | None = None,
) -> list[RACIChangeRecord]:
    """All RACI changes across a set of processes, in input order."""
    changes: list[RACIChangeRecord] = []
    process_count = 0
    for impact in impacts:
        process_count += 1
        changes.extend(analyze_process(impact, weights, thresholds))

    logger.info(
        "Analyzed %d processes: %d RACI changes", process_count, len(changes)
    )
    return changes


def summarize_change_types(changes: Iterable[RACIChangeRecord]) -> dict[ChangeType, int]:
    """Count changes per change type (all reportable types present, possibly 0)."""
    summary = {
        ChangeType.NEW_ASSIGNMENT: 0,
        ChangeType.REMOVED_ASSIGNMENT: 0,
        ChangeType.ROLE_CHANGE: 0,
    }
    for change in changes:
        summary[change.change_type] += 1
    return summary


def aggregate_role_load(
    impacts: Iterable[ProcessImpact],
    limit: int | None = None,
) -> list[RoleLoad]:
    """Count how often every named role appears across all RACI fields.

    Args:
        impacts: Processes to scan.
        limit: Keep only the N most loaded roles.

    Returns:
        RoleLoad per role, sorted by total_load descending (ties by name).
        Totals do not depend on input order.
    """
    as_is_counts: dict[str, int] = {}
    to_be_counts: dict[str, int] = {}
    processes_by_role: dict[str, set[str]] = {}

    for impact in impacts:
        for role in RACIRole:
            as_is, to_be = impact.raci_pair(role)
            for counts, value in ((as_is_counts, as_is), (to_be_counts, to_be)):
                for role_name in split_roles(value):
                    counts[role_name] = counts.get(role_name, 0) + 1
                    processes_by_role.setdefault(role_name, set()).add(
                        impact.process_code
                    )

    loads = [
        RoleLoad(
            role_name=role_name,
            as_is_count=as_is_counts.get(role_name, 0),
            to_be_count=to_be_counts.get(role_name, 0),
            process_count=len(process_codes),
        )
        for role_name, process_codes in processes_by_role.items()
    ]
    loads.sort(key=lambda load: (-load.total_load, load.role_name))

    if limit is not None:
        loads = loads[:limit]

    logger.debug("Aggregated load for %d roles", len(loads))
    return loads


def analyze_role_impacts(
    impacts: Iterable[ProcessImpact],
    limit: int | None = None,
) -> RoleImpactAnalysis:
    """Role load (top N) plus every RACI change, for the role impact matrix."""
    impacts = list(impacts)
    changes = analyze_changes(impacts)
    return RoleImpactAnalysis(
        role_load=aggregate_role_load(impacts, limit or settings.role_load_limit),
        changes=changes,
        change_type_summary=summarize_change_types(changes),
    )


def build_change_timeline(changes: Iterable[RACIChangeRecord]) -> list[ChangePhase]:
    """Group changes into rollout phases, most urgent first.

    Priorities without changes get no phase; phase numbers follow the
    fixed critical -> low order, so a timeline without critical changes
    starts at phase 2.
    """
    by_priority: dict[PriorityLevel, list[RACIChangeRecord]] = {}
    for change in changes:
        by_priority.setdefault(change.priority, []).append(change)

    return [
        ChangePhase(phase=index, priority=priority, changes=by_priority[priority])
        for index, priority in enumerate(PRIORITY_ORDER, start=1)
        if priority in by_priority
    ]


def describe_change(record: RACIChangeRecord) -> str:
    """One-line description of a change, e.g. "Responsible: AP Clerk → Shared Services"."""
    as_is = record.as_is_value.strip() or NO_ROLE_TEXT
    to_be = record.to_be_value.strip() or NO_ROLE_TEXT
    return f"{record.role.label}: {as_is} → {to_be}"


def describe_assignment_change(assignment: StakeholderRACI) -> str:
    """RACI letters one stakeholder holds before and after, e.g. "Responsible → Informed"."""
    texts = []
    for state in ("as_is", "to_be"):
        labels = [role.label for role in RACIRole if assignment.has_role(state, role)]
        texts.append(", ".join(labels) or NO_ROLE_TEXT)
    return f"{texts[0]} → {texts[1]}"


def describe_process_raci(impact: ProcessImpact) -> str:
    """Whole RACI of a process before and after, e.g. "R: AM, A: CFO → R: DC"."""
    texts = []
    for state_index in (0, 1):
        parts = []
        for role in RACIRole:
            value = impact.raci_pair(role)[state_index].strip()
            if value:
                parts.append(f"{role.value}: {value}")
        texts.append(", ".join(parts) or NO_RACI_TEXT)
    return f"{texts[0]} → {texts[1]}"


def summarize_change_priorities(
    changes: Iterable[RACIChangeRecord],
) -> dict[PriorityLevel, int]:
    """Count changes per priority, critical first (all levels present, possibly 0)."""
    summary = {priority: 0 for priority in PRIORITY_ORDER}
    for change in changes:
        summary[change.priority] += 1
    return summary


def group_changes_by_process(
    changes: Iterable[RACIChangeRecord],
) -> list[ProcessChanges]:
    """Group changes per process, in order of each process's first change."""
    groups: dict[str, ProcessChanges] = {}
    for change in changes:
        group = groups.get(change.process_id)
        if group is None:
            group = ProcessChanges(
                process_id=change.process_id,
                process_code=change.process_code,
                process_name=change.process_name,
            )
            groups[change.process_id] = group
        group.changes.append(change)
    return list(groups.values())


def summarize_change_tracking(
    changes: Iterable[RACIChangeRecord],
) -> ChangeTrackingSummary:
    """Headline counts for the responsibility change tracking view.

    High-impact changes sit on processes rated HIGH_IMPACT_CHANGE_RATING
    or more, critical ones on CRITICAL_CHANGE_RATING or more.
    """
    changes = list(changes)
    summary = ChangeTrackingSummary(
        total_changes=len(changes),
        processes_affected=len({c.process_id for c in changes}),
        high_impact_changes=sum(
            1 for c in changes if c.impact_rating >= HIGH_IMPACT_CHANGE_RATING
        ),
        critical_changes=sum(
            1 for c in changes if c.impact_rating >= CRITICAL_CHANGE_RATING
        ),
        changes_by_priority=summarize_change_priorities(changes),
    )
    logger.info(
        "Change tracking: %d changes across %d processes (%d critical)",
        summary.total_changes,
        summary.processes_affected,
        summary.critical_changes,
    )
    return summary
