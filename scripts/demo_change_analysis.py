"""Standalone demo of the change analysis engine.

Normalizes a few raw impact rows, then prints the overall rating breakdown,
the RACI changes with their priorities, the role load and the executive
summary. No database or running app required.

Usage:
    uv run python scripts/demo_change_analysis.py
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from impactiq.analysis import (
    aggregate_role_load,
    analyze_changes,
    build_change_timeline,
    build_executive_summary,
    get_overall_impact_breakdown,
)
from impactiq.ingestion import normalize_impact_rows
from impactiq.logging_config import setup_logging

setup_logging("WARNING")

# ---------------------------------------------------------------------------
# Step 1: Raw rows as the storage layer returns them
# ---------------------------------------------------------------------------

rows: list[dict[str, object]] = [
    {
        "process_id": "p-1",
        "process_hierarchy": {
            "id": "p-1",
            "process_code": "1.1",
            "process_name": "Supplier Invoice Entry",
            "level_number": 1,
            "department": "Finance",
        },
        "as_is_core_system": "Legacy AP",
        "to_be_core_system": "S/4HANA",
        "process_rating": "3",
        "role_rating": 2,
        "new_role_rating": 0,
        "workload_rating": 1,
        "system_complexity_rating": 3,
        "overall_impact_rating": 2,  # stale, will be recomputed
        "as_is_raci_r": "AP Clerk",
        "to_be_raci_r": "Shared Services",
        "as_is_raci_a": "AP Lead",
        "to_be_raci_a": "AP Lead",
        "to_be_raci_i": "Controller",
    },
    {
        "process_id": "p-2",
        "process_hierarchy": {
            "id": "p-2",
            "process_code": "1.2",
            "process_name": "Payment Run",
            "level_number": 1,
            "department": "Finance",
        },
        "as_is_core_system": "Legacy AP",
        "to_be_core_system": "Legacy AP",
        "process_rating": 1,
        "workload_rating": 1,
        "as_is_raci_c": "Treasury",
    },
]

impacts = normalize_impact_rows(rows)

# ---------------------------------------------------------------------------
# Step 2: Overall rating per process
# ---------------------------------------------------------------------------

print("=" * 70)
print("OVERALL IMPACT")
print("=" * 70)
for impact in impacts:
    breakdown = get_overall_impact_breakdown(impact)
    print(f"{impact.process_code:<6} {impact.process_name:<28} {breakdown.breakdown}")
print()

# ---------------------------------------------------------------------------
# Step 3: RACI changes and rollout phases
# ---------------------------------------------------------------------------

changes = analyze_changes(impacts)

print("=" * 70)
print("RACI CHANGES")
print("=" * 70)
for change in changes:
    print(
        f"{change.process_code:<6} {change.role.label:<12} "
        f"{change.as_is_value or '-':<12} -> {change.to_be_value or '-':<16} "
        f"{change.change_type.value:<20} {change.priority.value}"
    )
print()

for phase in build_change_timeline(changes):
    print(f"{phase.label}: {len(phase.changes)} change(s), ~{phase.estimated_weeks} weeks")
print()

# ---------------------------------------------------------------------------
# Step 4: Role load and executive summary
# ---------------------------------------------------------------------------

print("=" * 70)
print("ROLE LOAD")
print("=" * 70)
for load in aggregate_role_load(impacts):
    print(f"{load.role_name:<16} as-is {load.as_is_count}  to-be {load.to_be_count}")
print()

summary = build_executive_summary(impacts)
print("=" * 70)
print("EXECUTIVE SUMMARY")
print("=" * 70)
print(f"Processes:        {summary.total_processes}")
print(f"Critical impact:  {summary.critical_impact_processes}")
print(f"Average rating:   {summary.average_impact_rating}")
print(f"Severity:         {summary.severity.value}")
print(f"RACI changes:     {summary.raci_changes.total_changes}")
