"""ImpactIQ domain models."""

from impactiq.models.analysis import (
    ImpactBand,
    ImpactLevel,
    LoadIntensity,
    PriorityLevel,
    SeverityLevel,
)
from impactiq.models.hierarchy import ProcessNode
from impactiq.models.impact import (
    SUB_RATING_FIELDS,
    ImpactDirection,
    ImpactRatings,
    ProcessImpact,
    WorkloadDirection,
)
from impactiq.models.raci import (
    ChangeType,
    RACIChangeRecord,
    RACIRole,
    RoleLoad,
    StakeholderRACI,
)

__all__ = [
    "SUB_RATING_FIELDS",
    # RACI
    "ChangeType",
    # Levels
    "ImpactBand",
    # Impact
    "ImpactDirection",
    "ImpactLevel",
    "ImpactRatings",
    "LoadIntensity",
    "PriorityLevel",
    "ProcessImpact",
    # Hierarchy
    "ProcessNode",
    "RACIChangeRecord",
    "RACIRole",
    "RoleLoad",
    "SeverityLevel",
    "StakeholderRACI",
    "WorkloadDirection",
]
