"""ImpactIQ analysis algorithms."""

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
from impactiq.analysis.hierarchy import (
    ProcessTreeNode,
    build_hierarchy_tree,
    flatten_hierarchy,
)
from impactiq.analysis.portfolio import (
    ExecutiveSummary,
    ImpactStatistics,
    analyze_correlations,
    analyze_department_breakdown,
    analyze_system_complexity,
    analyze_training_requirements,
    assess_implementation_risk,
    build_executive_summary,
    build_role_matrix,
    calculate_process_statistics,
    structure_heatmap,
    summarize_impact_by_level,
    summarize_raci_changes,
    summarize_raci_coverage,
)
from impactiq.analysis.raci import (
    ChangePhase,
    ChangeTrackingSummary,
    ProcessChanges,
    RoleImpactAnalysis,
    aggregate_role_load,
    analyze_changes,
    analyze_process,
    analyze_role_impacts,
    build_change_timeline,
    change_weight,
    compute_priority,
    describe_assignment_change,
    describe_change,
    describe_process_raci,
    diff_raci_field,
    group_changes_by_process,
    has_raci_change,
    prioritize_process,
    split_roles,
    summarize_change_priorities,
    summarize_change_tracking,
    summarize_change_types,
)
from impactiq.analysis.rating import (
    ImpactBreakdown,
    calculate_overall_impact_rating,
    effective_rating,
    get_overall_impact_breakdown,
    normalize_ratings,
    refresh_overall_rating,
)
from impactiq.analysis.validation import (
    validate_impact_ratings,
    validate_process_hierarchy,
    validate_raci_assignments,
)

__all__ = [
    "ChangePhase",
    "ChangeTrackingSummary",
    "ExecutiveSummary",
    "ImpactBreakdown",
    "ImpactStatistics",
    "ProcessChanges",
    "ProcessTreeNode",
    "RatingScale",
    "RoleImpactAnalysis",
    "aggregate_role_load",
    "analyze_changes",
    "analyze_correlations",
    "analyze_department_breakdown",
    "analyze_process",
    "analyze_role_impacts",
    "analyze_system_complexity",
    "analyze_training_requirements",
    "assess_implementation_risk",
    "build_change_timeline",
    "build_executive_summary",
    "build_hierarchy_tree",
    "build_role_matrix",
    "calculate_overall_impact_rating",
    "calculate_process_statistics",
    "change_weight",
    "classify_change_intensity",
    "classify_impact_band",
    "classify_impact_level",
    "classify_load_intensity",
    "classify_overall_rating",
    "classify_rating",
    "classify_severity_by_ratio",
    "classify_sub_rating",
    "classify_training_urgency",
    "compute_priority",
    "describe_assignment_change",
    "describe_change",
    "describe_process_raci",
    "diff_raci_field",
    "effective_rating",
    "flatten_hierarchy",
    "get_overall_impact_breakdown",
    "group_changes_by_process",
    "has_raci_change",
    "normalize_ratings",
    "prioritize_process",
    "refresh_overall_rating",
    "split_roles",
    "structure_heatmap",
    "summarize_change_priorities",
    "summarize_change_tracking",
    "summarize_change_types",
    "summarize_impact_by_level",
    "summarize_raci_changes",
    "summarize_raci_coverage",
    "validate_impact_ratings",
    "validate_process_hierarchy",
    "validate_raci_assignments",
]
