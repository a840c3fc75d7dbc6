"""CSV export functionality for ImpactIQ analysis results."""

import csv
import io
import logging
from collections.abc import Iterable, Mapping

from impactiq.analysis.classification import classify_load_intensity
from impactiq.analysis.portfolio import ExecutiveSummary
from impactiq.models import RACIChangeRecord, RoleLoad

logger = logging.getLogger(__name__)


def export_raci_changes_csv(changes: list[RACIChangeRecord]) -> bytes:
    """Export RACI changes to CSV format (one row per changed RACI letter).

    Args:
        changes: Change records, e.g. from analyze_changes.

    Returns:
        CSV content as bytes (UTF-8 encoded).
    """
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(
        [
            "Process Code",
            "Process Name",
            "RACI Role",
            "As-Is",
            "To-Be",
            "Change Type",
            "Impact Rating",
            "Priority",
        ]
    )

    for c in changes:
        writer.writerow(
            [
                c.process_code,
                c.process_name,
                c.role.label,
                c.as_is_value,
                c.to_be_value,
                c.change_type.value,
                c.impact_rating,
                c.priority.value,
            ]
        )

    logger.info("Exported %d RACI changes to CSV", len(changes))
    return output.getvalue().encode("utf-8")


def export_role_load_csv(role_load: list[RoleLoad]) -> bytes:
    """Export role load to CSV format, intensity relative to the most loaded role.

    Args:
        role_load: Role loads sorted by total load, e.g. from aggregate_role_load.

    Returns:
        CSV content as bytes (UTF-8 encoded).
    """
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(
        [
            "Role",
            "As-Is Assignments",
            "To-Be Assignments",
            "Net Change",
            "Total Load",
            "Processes",
            "Load Intensity",
        ]
    )

    max_load = max((r.total_load for r in role_load), default=0)
    for r in role_load:
        writer.writerow(
            [
                r.role_name,
                r.as_is_count,
                r.to_be_count,
                f"{r.net_change:+d}",
                r.total_load,
                r.process_count,
                classify_load_intensity(r.total_load, max_load).value,
            ]
        )

    logger.info("Exported load for %d roles to CSV", len(role_load))
    return output.getvalue().encode("utf-8")


def export_hierarchy_csv(rows: Iterable[Mapping[str, object]]) -> bytes:
    """Export flattened hierarchy rows (see flatten_hierarchy) to CSV format."""
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(["Process Code", "Process Name", "Level", "Hierarchy Path", "Sort Order"])

    count = 0
    for row in rows:
        writer.writerow(
            [
                row.get("process_code", ""),
                row.get("process_name", ""),
                row.get("level_label", ""),
                row.get("hierarchy_path", ""),
                row.get("sort_order", ""),
            ]
        )
        count += 1

    logger.info("Exported %d hierarchy rows to CSV", count)
    return output.getvalue().encode("utf-8")


def export_executive_summary_csv(summary: ExecutiveSummary) -> bytes:
    """Export the executive summary to CSV format.

    Creates a multi-section CSV: headline metrics, RACI changes by role,
    most impacted systems and the department breakdown.

    Args:
        summary: Result of build_executive_summary.

    Returns:
        CSV content as bytes (UTF-8 encoded).
    """
    output = io.StringIO()
    writer = csv.writer(output)

    training = summary.training_requirements

    # Summary section
    writer.writerow(["ImpactIQ Executive Summary"])
    writer.writerow(["Total Processes", summary.total_processes])
    writer.writerow(["Critical Impact Processes", summary.critical_impact_processes])
    writer.writerow(["High Impact Processes", summary.high_impact_processes])
    writer.writerow(["Average Impact Rating", f"{summary.average_impact_rating:.1f}"])
    writer.writerow(["Severity", summary.severity.value])
    writer.writerow(["RACI Changes", summary.raci_changes.total_changes])
    writer.writerow(["Change Intensity", summary.change_intensity.value])
    writer.writerow(["Training Required (%)", training.percentage_requiring_training])
    writer.writerow(["Training Urgency", training.urgency.value])
    for level, count in summary.process_levels.items():
        writer.writerow([f"L{level} Processes", count])
    writer.writerow([])

    # RACI section
    writer.writerow(["RACI CHANGES BY ROLE"])
    writer.writerow(["Role", "Changes"])
    for role, count in summary.raci_changes.changes_by_role.items():
        writer.writerow([role.label, count])
    writer.writerow([])

    # Systems section
    if summary.system_complexity.system_changes:
        writer.writerow(["SYSTEMS"])
        writer.writerow(["System", "Processes", "Total Impact"])
        for system in summary.system_complexity.system_changes:
            writer.writerow([system.system, system.processes, system.total_impact])
        writer.writerow([])

    # Departments section
    if summary.department_breakdown:
        writer.writerow(["DEPARTMENTS"])
        writer.writerow(
            ["Department", "Processes", "High Impact", "Total Impact", "Average Impact"]
        )
        for dept in summary.department_breakdown:
            writer.writerow(
                [
                    dept.department,
                    dept.total_processes,
                    dept.high_impact_processes,
                    dept.total_impact,
                    f"{dept.average_impact:.1f}",
                ]
            )

    logger.info("Exported executive summary to CSV")
    return output.getvalue().encode("utf-8")
