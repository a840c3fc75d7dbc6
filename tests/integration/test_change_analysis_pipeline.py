"""Integration tests for the change analysis pipeline.

Raw rows go through normalization, rating, RACI change analysis, role load,
portfolio aggregation and CSV export without any mocking.
"""

import pandas as pd

from impactiq.analysis import (
    aggregate_role_load,
    analyze_changes,
    analyze_process,
    build_change_timeline,
    build_executive_summary,
    calculate_overall_impact_rating,
    classify_severity_by_ratio,
    get_overall_impact_breakdown,
)
from impactiq.export import export_executive_summary_csv, export_raci_changes_csv
from impactiq.ingestion import impacts_from_dataframe, normalize_impact_rows
from impactiq.models import ChangeType, PriorityLevel, RACIRole, SeverityLevel


def _rated_rows(count: int, high: int) -> list[dict[str, object]]:
    """`count` rows, the first `high` of them rated 4 (10 points)."""
    rows: list[dict[str, object]] = []
    for index in range(count):
        row: dict[str, object] = {"process_id": f"p{index}"}
        if index < high:
            row.update(process_rating=3, role_rating=3, workload_rating=3, new_role_rating=1)
        rows.append(row)
    return rows


def test_breakdown_of_six_points():
    rows = [
        {
            "process_id": "p1",
            "process_rating": 2,
            "role_rating": 1,
            "new_role_rating": 0,
            "workload_rating": 2,
            "system_complexity_rating": 1,
        }
    ]
    (impact,) = normalize_impact_rows(rows)
    assert calculate_overall_impact_rating(impact) == 3
    assert get_overall_impact_breakdown(impact).breakdown == "6/15 points = High Impact"


def test_unchanged_and_new_assignment():
    p1, p2 = normalize_impact_rows(
        [
            {"process_id": "P1", "as_is_raci_r": "AM", "to_be_raci_r": "AM"},
            {"process_id": "P2", "as_is_raci_r": "", "to_be_raci_r": "DC"},
        ]
    )
    assert analyze_process(p1) == []
    (record,) = analyze_process(p2)
    assert record.role == RACIRole.RESPONSIBLE
    assert record.change_type == ChangeType.NEW_ASSIGNMENT
    assert record.process_id == "P2"


def test_severity_of_three_high_impact_out_of_ten():
    impacts = normalize_impact_rows(_rated_rows(10, 3))
    summary = build_executive_summary(impacts)
    assert summary.critical_impact_processes == 3
    # Inclusive bands: exactly 30% meets the "high" lower bound
    assert summary.severity == SeverityLevel.HIGH
    assert classify_severity_by_ratio(3, 10) == summary.severity


def test_spreadsheet_to_reports():
    df = pd.DataFrame(
        {
            "Process ID": ["h1", "h2", "h3"],
            "Process Code": ["1", "1.1", "1.2"],
            "Process Name": ["Finance", "Payables", "Payment Run"],
            "Level Number": [0, 1, 1],
            "Department": ["Finance", "Finance", "Treasury"],
            "As-Is Core System": ["Legacy", "Legacy", "Bank Portal"],
            "To-Be Core System": ["S/4HANA", "S/4HANA", "Bank Portal"],
            "Process Rating": [3, 2, 1],
            "Role Rating": [3, 2, 0],
            "Workload Rating": [3, 1, 1],
            "System Complexity": [3, 3, 0],
            "Overall Impact": [1, 1, 1],
            "As-Is RACI R": ["FC", "AP Clerk", "Treasury"],
            "To-Be RACI R": ["FC", "Shared Services", "Treasury"],
            "As-Is RACI A": ["CFO", "FC", "CFO"],
            "To-Be RACI A": ["CFO", "FC", ""],
            "To-Be RACI I": ["", "Controller", ""],
        }
    )

    impacts = impacts_from_dataframe(df)
    assert [i.overall_impact_rating for i in impacts] == [5, 3, 1]
    assert [i.process_code for i in impacts] == ["1", "1.1", "1.2"]

    changes = analyze_changes(impacts)
    assert [(c.process_code, c.role, c.change_type) for c in changes] == [
        ("1.1", RACIRole.RESPONSIBLE, ChangeType.ROLE_CHANGE),
        ("1.1", RACIRole.INFORMED, ChangeType.NEW_ASSIGNMENT),
        ("1.2", RACIRole.ACCOUNTABLE, ChangeType.REMOVED_ASSIGNMENT),
    ]
    assert [c.priority for c in changes] == [
        PriorityLevel.HIGH,
        PriorityLevel.HIGH,
        PriorityLevel.LOW,
    ]

    timeline = build_change_timeline(changes)
    assert [p.priority for p in timeline] == [PriorityLevel.HIGH, PriorityLevel.LOW]

    loads = aggregate_role_load(impacts)
    assert [(load.role_name, load.total_load) for load in loads[:2]] == [("FC", 4), ("CFO", 3)]
    assert loads[0].process_count == 2

    summary = build_executive_summary(impacts)
    assert summary.total_processes == 3
    assert summary.critical_impact_processes == 1
    assert summary.severity == SeverityLevel.HIGH
    assert [d.department for d in summary.department_breakdown] == ["Finance", "Treasury"]

    changes_csv = export_raci_changes_csv(changes).decode("utf-8")
    assert "Shared Services" in changes_csv
    summary_csv = export_executive_summary_csv(summary).decode("utf-8")
    assert "S/4HANA" in summary_csv
