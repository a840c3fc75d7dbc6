"""ImpactIQ - impact rating and RACI change-analysis engine.

Import from submodules directly:
    from impactiq.models import ProcessImpact, RACIChangeRecord, RoleLoad
    from impactiq.analysis import calculate_overall_impact_rating, analyze_process
    from impactiq.ingestion import normalize_impact_rows
"""

__version__ = "0.1.0"
