"""Assessment-level dashboard aggregates for ImpactIQ.

Pure algorithmic logic over lists of already-fetched ProcessImpact
records: statistics, per-level summaries, heatmap structure, RACI and
system change summaries, training needs, implementation risk and the
executive summary that combines them.

Every function uses the recomputed overall rating (effective_rating),
never the stored one.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from impactiq.analysis.classification import (
    classify_change_intensity,
    classify_impact_band,
    classify_impact_level,
    classify_severity_by_ratio,
    classify_training_urgency,
)
from impactiq.analysis.raci import diff_raci_field, has_raci_change, split_roles
from impactiq.analysis.rating import effective_rating
from impactiq.config import settings
from impactiq.models import (
    ChangeType,
    ImpactBand,
    ImpactLevel,
    ProcessImpact,
    RACIRole,
    SeverityLevel,
)

logger = logging.getLogger(__name__)

# Heatmap / level-summary levels (deeper processes are shown with L2)
HEATMAP_LEVELS: tuple[str, ...] = ("L0", "L1", "L2")
SUMMARY_LEVELS: tuple[int, ...] = (0, 1, 2)

# "High impact" for dashboards that count 3+ as high, separate from the
# configurable critical threshold (4 by default)
ELEVATED_IMPACT_RATING = 3

# Implementation risk: rating + 1 per system change + 1 per RACI change
RISK_HIGH_SCORE = 6
RISK_MEDIUM_SCORE = 3

UNKNOWN_DEPARTMENT = "Unknown"


@dataclass
class ImpactStatistics:
    """Distribution of overall ratings across an assessment."""

    total: int
    impact_distribution: dict[int, int]
    average_impact: float
    high_impact_percentage: int


@dataclass
class LevelSummary:
    """Impact buckets of the processes on one hierarchy level."""

    total: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0


@dataclass
class HeatmapCell:
    """One process in the impact heatmap."""

    process_id: str
    process_code: str
    process_name: str
    impact: int
    band: ImpactBand
    node_id: str | None = None
    parent_id: str | None = None
    department: str | None = None
    functional_area: str | None = None
    children: list["HeatmapCell"] = field(default_factory=list)

    @property
    def average_child_impact(self) -> float:
        """Mean impact of direct children (0.0 without children)."""
        if not self.children:
            return 0.0
        return sum(c.impact for c in self.children) / len(self.children)


@dataclass
class RACIChangeSummary:
    """How many RACI fields changed, per letter and per process."""

    total_changes: int
    changes_by_role: dict[RACIRole, int]
    processes_with_changes: int


@dataclass
class RACICoverage:
    """Which processes have RACI text at all, and which letters are filled."""

    total_processes: int
    processes_with_raci: int
    processes_without_raci: int
    as_is_assignments: dict[RACIRole, int]
    to_be_assignments: dict[RACIRole, int]


@dataclass
class SystemLoad:
    """Processes and summed impact touching one core system."""

    system: str
    processes: int = 0
    total_impact: int = 0


@dataclass
class SystemComplexity:
    total_systems: int
    system_changes: list[SystemLoad]


@dataclass
class TrainingRequirements:
    """Processes that need training: flagged, high impact, or an R/A change."""

    total_requiring_training: int
    percentage_requiring_training: int
    high_impact_training: int

    @property
    def urgency(self) -> SeverityLevel:
        return classify_training_urgency(self.percentage_requiring_training)


@dataclass
class DepartmentStats:
    department: str
    total_processes: int = 0
    high_impact_processes: int = 0
    total_impact: int = 0

    @property
    def average_impact(self) -> float:
        if not self.total_processes:
            return 0.0
        return round(self.total_impact / self.total_processes, 1)


@dataclass
class RiskAssessment:
    """Implementation risk buckets across an assessment."""

    high: int
    medium: int
    low: int
    total: int


@dataclass
class Correlations:
    """Overlap between high impact, system migration and RACI change."""

    high_impact_system: int
    high_impact_raci: int
    system_raci: int


@dataclass
class RoleMatrixEntry:
    role: RACIRole
    impact: int


@dataclass
class RoleMatrixRow:
    """To-Be roles of one process for the process x role matrix."""

    process_name: str
    impact_rating: int
    roles: dict[str, RoleMatrixEntry] = field(default_factory=dict)


@dataclass
class ExecutiveSummary:
    """Headline metrics for the executive dashboard cards."""

    total_processes: int
    critical_impact_processes: int
    high_impact_processes: int
    process_levels: dict[int, int]
    average_impact_rating: float
    raci_changes: RACIChangeSummary
    system_complexity: SystemComplexity
    training_requirements: TrainingRequirements
    department_breakdown: list[DepartmentStats]
    severity: SeverityLevel

    @property
    def change_intensity(self) -> SeverityLevel:
        return classify_change_intensity(self.raci_changes.total_changes)


def _rated(impacts: Iterable[ProcessImpact]) -> list[tuple[ProcessImpact, int]]:
    return [(impact, effective_rating(impact)) for impact in impacts]


def _average(values: list[int]) -> float:
    return round(sum(values) / len(values), 1) if values else 0.0


def calculate_process_statistics(impacts: Iterable[ProcessImpact]) -> ImpactStatistics:
    """Rating distribution, average and share of high-impact processes."""
    rated = _rated(impacts)
    distribution = {rating: 0 for rating in range(6)}
    for _, rating in rated:
        distribution[rating] += 1

    ratings = [rating for _, rating in rated]
    high = sum(1 for r in ratings if r >= settings.high_impact_threshold)
    return ImpactStatistics(
        total=len(rated),
        impact_distribution=distribution,
        average_impact=_average(ratings),
        high_impact_percentage=round(high / len(rated) * 100) if rated else 0,
    )


def summarize_impact_by_level(impacts: Iterable[ProcessImpact]) -> dict[str, LevelSummary]:
    """High / medium / low counts per hierarchy level (level_0..level_2).

    Processes without a joined hierarchy row, or deeper than L2, are not
    counted.
    """
    summary = {f"level_{level}": LevelSummary() for level in SUMMARY_LEVELS}
    for impact, rating in _rated(impacts):
        bucket = summary.get(f"level_{impact.level_number}")
        if bucket is None:
            continue
        bucket.total += 1
        level = classify_impact_level(rating)
        if level == ImpactLevel.HIGH:
            bucket.high += 1
        elif level == ImpactLevel.MEDIUM:
            bucket.medium += 1
        else:
            bucket.low += 1
    return summary


def structure_heatmap(impacts: Iterable[ProcessImpact]) -> dict[str, dict[str, HeatmapCell]]:
    """Arrange processes into L0 -> L1 -> L2 heatmap maps keyed by process code.

    Unknown or deeper levels are shown on L2. The first process seen for a
    code wins. L2 cells are attached to their L1 parent and L1 cells to
    their L0 parent by hierarchy id.
    """
    heatmap: dict[str, dict[str, HeatmapCell]] = {level: {} for level in HEATMAP_LEVELS}

    for impact, rating in _rated(impacts):
        level_number = impact.level_number
        level = f"L{level_number}" if level_number in (0, 1) else "L2"
        if impact.process_code in heatmap[level]:
            continue
        node = impact.process
        heatmap[level][impact.process_code] = HeatmapCell(
            process_id=impact.process_id,
            process_code=impact.process_code,
            process_name=impact.process_name,
            impact=rating,
            band=classify_impact_band(rating),
            node_id=node.id if node else None,
            parent_id=node.parent_id if node else None,
            department=node.department if node else None,
            functional_area=node.functional_area if node else None,
        )

    for parent_level, child_level in (("L1", "L2"), ("L0", "L1")):
        parents = {
            cell.node_id: cell
            for cell in heatmap[parent_level].values()
            if cell.node_id is not None
        }
        for child in heatmap[child_level].values():
            parent = parents.get(child.parent_id) if child.parent_id else None
            if parent is not None:
                parent.children.append(child)

    return heatmap


def summarize_raci_changes(impacts: Iterable[ProcessImpact]) -> RACIChangeSummary:
    """Count changed RACI fields per letter and processes with any change."""
    changes_by_role = {role: 0 for role in RACIRole}
    processes_with_changes = 0

    for impact in impacts:
        changed = False
        for role in RACIRole:
            if diff_raci_field(*impact.raci_pair(role)) != ChangeType.NO_CHANGE:
                changes_by_role[role] += 1
                changed = True
        processes_with_changes += changed

    return RACIChangeSummary(
        total_changes=sum(changes_by_role.values()),
        changes_by_role=changes_by_role,
        processes_with_changes=processes_with_changes,
    )


def summarize_raci_coverage(impacts: Iterable[ProcessImpact]) -> RACICoverage:
    """Processes with / without RACI text and filled letters per state."""
    impacts = list(impacts)
    as_is = {role: 0 for role in RACIRole}
    to_be = {role: 0 for role in RACIRole}
    with_raci = 0

    for impact in impacts:
        if not impact.has_any_raci:
            continue
        with_raci += 1
        for role in RACIRole:
            as_is_value, to_be_value = impact.raci_pair(role)
            as_is[role] += bool(split_roles(as_is_value))
            to_be[role] += bool(split_roles(to_be_value))

    return RACICoverage(
        total_processes=len(impacts),
        processes_with_raci=with_raci,
        processes_without_raci=len(impacts) - with_raci,
        as_is_assignments=as_is,
        to_be_assignments=to_be,
    )


def analyze_system_complexity(
    impacts: Iterable[ProcessImpact],
    limit: int | None = None,
) -> SystemComplexity:
    """Systems touched by the assessment, most impacted first.

    A process counts toward its As-Is system, and toward its To-Be system
    when that is a different one.
    """
    loads: dict[str, SystemLoad] = {}

    for impact, rating in _rated(impacts):
        systems = [impact.as_is_system]
        if impact.to_be_system != impact.as_is_system:
            systems.append(impact.to_be_system)
        for system in systems:
            if not system:
                continue
            load = loads.setdefault(system, SystemLoad(system=system))
            load.processes += 1
            load.total_impact += rating

    ranked = sorted(loads.values(), key=lambda s: (-s.total_impact, s.system))
    return SystemComplexity(
        total_systems=len(loads),
        system_changes=ranked[: limit or settings.system_load_limit],
    )


def analyze_training_requirements(impacts: Iterable[ProcessImpact]) -> TrainingRequirements:
    """Processes needing training: flagged, high impact, or R/A changed."""
    rated = _rated(impacts)
    threshold = settings.high_impact_threshold
    needing = [
        (impact, rating)
        for impact, rating in rated
        if impact.training_required
        or rating >= threshold
        or has_raci_change(impact, (RACIRole.RESPONSIBLE, RACIRole.ACCOUNTABLE))
    ]
    return TrainingRequirements(
        total_requiring_training=len(needing),
        percentage_requiring_training=round(len(needing) / len(rated) * 100) if rated else 0,
        high_impact_training=sum(1 for _, rating in needing if rating >= threshold),
    )


def analyze_department_breakdown(impacts: Iterable[ProcessImpact]) -> list[DepartmentStats]:
    """Per-department totals, highest summed impact first."""
    departments: dict[str, DepartmentStats] = {}
    for impact, rating in _rated(impacts):
        name = impact.department or UNKNOWN_DEPARTMENT
        stats = departments.setdefault(name, DepartmentStats(department=name))
        stats.total_processes += 1
        stats.total_impact += rating
        if rating >= settings.high_impact_threshold:
            stats.high_impact_processes += 1

    return sorted(departments.values(), key=lambda d: (-d.total_impact, d.department))


def assess_implementation_risk(impacts: Iterable[ProcessImpact]) -> RiskAssessment:
    """Bucket processes by rating plus one point each for a system and a RACI change."""
    high = medium = low = 0
    rated = _rated(impacts)
    for impact, rating in rated:
        score = rating + int(impact.has_system_change) + int(has_raci_change(impact))
        if score >= RISK_HIGH_SCORE:
            high += 1
        elif score >= RISK_MEDIUM_SCORE:
            medium += 1
        else:
            low += 1
    return RiskAssessment(high=high, medium=medium, low=low, total=len(rated))


def analyze_correlations(impacts: Iterable[ProcessImpact]) -> Correlations:
    """Count processes showing two kinds of change at once."""
    high_system = high_raci = system_raci = 0
    for impact, rating in _rated(impacts):
        is_high = rating >= settings.high_impact_threshold
        system_change = impact.has_system_change
        raci_change = has_raci_change(impact)
        high_system += is_high and system_change
        high_raci += is_high and raci_change
        system_raci += system_change and raci_change
    return Correlations(
        high_impact_system=high_system,
        high_impact_raci=high_raci,
        system_raci=system_raci,
    )


def build_role_matrix(impacts: Iterable[ProcessImpact]) -> dict[str, RoleMatrixRow]:
    """To-Be role names per process code, for the process x role matrix.

    A role listed under several letters keeps the last one in R, A, C, I order.
    """
    matrix: dict[str, RoleMatrixRow] = {}
    for impact, rating in _rated(impacts):
        row = RoleMatrixRow(process_name=impact.process_name, impact_rating=rating)
        for role in RACIRole:
            _, to_be = impact.raci_pair(role)
            for role_name in split_roles(to_be):
                row.roles[role_name] = RoleMatrixEntry(role=role, impact=rating)
        matrix[impact.process_code] = row
    return matrix


def build_executive_summary(impacts: Iterable[ProcessImpact]) -> ExecutiveSummary:
    """Combine the dashboard aggregates into the executive summary.

    Args:
        impacts: All processes of one assessment.

    Returns:
        ExecutiveSummary whose severity is the share of processes at or
        above the high-impact threshold, banded by classify_severity_by_ratio.
    """
    impacts = list(impacts)
    ratings = [rating for _, rating in _rated(impacts)]
    critical = sum(1 for r in ratings if r >= settings.high_impact_threshold)

    summary = ExecutiveSummary(
        total_processes=len(impacts),
        critical_impact_processes=critical,
        high_impact_processes=sum(1 for r in ratings if r >= ELEVATED_IMPACT_RATING),
        process_levels={
            level: sum(1 for i in impacts if i.level_number == level)
            for level in SUMMARY_LEVELS
        },
        average_impact_rating=_average(ratings),
        raci_changes=summarize_raci_changes(impacts),
        system_complexity=analyze_system_complexity(impacts),
        training_requirements=analyze_training_requirements(impacts),
        department_breakdown=analyze_department_breakdown(impacts),
        severity=classify_severity_by_ratio(critical, len(impacts)),
    )

    logger.info(
        "Executive summary: %d processes, %d critical, %d RACI changes, severity %s",
        summary.total_processes,
        summary.critical_impact_processes,
        summary.raci_changes.total_changes,
        summary.severity.value,
    )
    return summary
