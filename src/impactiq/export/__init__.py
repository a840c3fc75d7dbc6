"""ImpactIQ export functionality."""

from impactiq.export.csv_export import (
    export_executive_summary_csv,
    export_hierarchy_csv,
    export_raci_changes_csv,
    export_role_load_csv,
)

__all__ = [
    "export_executive_summary_csv",
    "export_hierarchy_csv",
    "export_raci_changes_csv",
    "export_role_load_csv",
]
