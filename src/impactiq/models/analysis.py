"""Classification levels shared by analysis results."""

from enum import Enum


class PriorityLevel(str, Enum):
    """Priority of a process or of a single RACI change."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SeverityLevel(str, Enum):
    """Portfolio-level severity band (share of high-impact processes)."""

    NONE = "none"  # Empty portfolio
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ImpactBand(str, Enum):
    """Heatmap colour band for a (possibly averaged) overall rating."""

    NONE = "none"
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ImpactLevel(str, Enum):
    """Coarse three-way bucket used by per-level summaries."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class LoadIntensity(str, Enum):
    """How loaded a role is relative to the most loaded role."""

    NONE = "none"
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"
