"""Data ingestion module for ImpactIQ.

Normalizes rows that the import or storage layer has already read.
No files are parsed here.

Example usage:
    >>> from impactiq.ingestion import normalize_impact_rows, impacts_from_dataframe
    >>>
    >>> # Rows fetched from storage, hierarchy joined
    >>> impacts = normalize_impact_rows(rows)
    >>>
    >>> # Sheet already read by the import layer
    >>> impacts = impacts_from_dataframe(df)
"""

from impactiq.ingestion.normalizer import (
    COLUMN_ALIASES,
    impacts_from_dataframe,
    normalize_impact_row,
    normalize_impact_rows,
    raci_fields_from_assignments,
)

__all__ = [
    "COLUMN_ALIASES",
    "impacts_from_dataframe",
    "normalize_impact_row",
    "normalize_impact_rows",
    "raci_fields_from_assignments",
]
