"""Raw row normalization for ImpactIQ.

Turns loosely typed rows (database rows, spreadsheet rows already read by
the import layer) into validated ProcessImpact models. Handles common
issues: column name variations, ratings stored as text, out-of-range
sub-ratings, stale overall ratings, blank enums, and the legacy
per-stakeholder RACI flags.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Literal

import pandas as pd
from pydantic import ValidationError as PydanticValidationError

from impactiq.analysis.rating import calculate_overall_impact_rating, normalize_ratings
from impactiq.exceptions import ExtractionError, ValidationError
from impactiq.models import ProcessImpact, ProcessNode, RACIRole, StakeholderRACI
from impactiq.models.impact import coerce_rating_value

logger = logging.getLogger(__name__)

# Keys holding a joined process hierarchy row
HIERARCHY_KEYS = ("process_hierarchy", "process")

# Flat columns that describe the process itself when no joined row is present
HIERARCHY_COLUMNS = (
    "process_code",
    "process_name",
    "level_number",
    "parent_id",
    "sort_order",
    "department",
    "functional_area",
)

# Key holding legacy structured RACI rows (list of StakeholderRACI-like mappings)
ASSIGNMENTS_KEY = "raci_assignments"

# Common column name variations for auto-mapping
COLUMN_ALIASES: dict[str, list[str]] = {
    "process_id": [
        "process_id",
        "process_hierarchy_id",
        "hierarchy_id",
    ],
    "level_number": [
        "level_number",
        "level",
        "process_level",
        "hierarchy_level",
    ],
    "as_is_description": [
        "as_is_description",
        "as_is",
        "as_is_process",
        "current_state",
        "current_process",
    ],
    "to_be_description": [
        "to_be_description",
        "to_be",
        "to_be_process",
        "future_state",
        "future_process",
    ],
    "as_is_system": [
        "as_is_system",
        "as_is_core_system",
        "current_system",
        "legacy_system",
    ],
    "to_be_system": [
        "to_be_system",
        "to_be_core_system",
        "future_system",
        "target_system",
    ],
    "process_rating": [
        "process_rating",
        "process_change",
        "process_impact",
    ],
    "role_rating": [
        "role_rating",
        "role_change",
        "role_impact",
    ],
    "new_role_rating": [
        "new_role_rating",
        "new_role",
        "new_roles",
        "new_role_impact",
    ],
    "workload_rating": [
        "workload_rating",
        "workload",
        "workload_change",
        "workload_impact",
    ],
    "system_complexity_rating": [
        "system_complexity_rating",
        "system_complexity",
        "system_rating",
        "system_impact",
    ],
    "overall_impact_rating": [
        "overall_impact_rating",
        "overall_impact",
        "overall_rating",
        "impact_rating",
    ],
    "training_required": [
        "training_required",
        "training",
        "training_needed",
    ],
    "data_migration_required": [
        "data_migration_required",
        "data_migration",
        "migration_required",
    ],
}


def _normalize_column_name(col: str) -> str:
    """Normalize column name for matching (lowercase, strip, replace spaces).

    Also removes parenthetical suffixes like (0-3) and separators like "-" or "/".
    """
    normalized = str(col).lower().strip()
    # Remove parenthetical suffixes like (0-3), (Y/N)
    normalized = re.sub(r"\s*\([^)]*\)\s*$", "", normalized)
    # As-Is / To-Be, Core-System, Training/Migration
    normalized = re.sub(r"[\s\-/]+", "_", normalized)
    normalized = normalized.strip("_")
    return normalized


def _column_mapping(columns: Iterable[str]) -> dict[str, str]:
    """Original column name -> standard field name for every recognized alias."""
    columns = list(columns)
    column_mapping: dict[str, str] = {}
    normalized_cols = {_normalize_column_name(c): c for c in columns}

    for standard_name, aliases in COLUMN_ALIASES.items():
        # Check if standard name already exists
        if standard_name in columns:
            continue

        for alias in aliases:
            original_col = normalized_cols.get(_normalize_column_name(alias))
            if original_col is not None and original_col not in column_mapping:
                column_mapping[original_col] = standard_name
                logger.debug("Mapped column '%s' -> '%s'", original_col, standard_name)
                break

    return column_mapping


def _map_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Map common column name variations to ProcessImpact field names.

    RACI columns ("As-Is RACI R") and the remaining fields only need their
    names normalized, which happens for every column that is not an alias.
    """
    column_mapping = _column_mapping(df.columns)
    for col in df.columns:
        if col not in column_mapping:
            normalized = _normalize_column_name(col)
            if normalized != col:
                column_mapping[col] = normalized

    if column_mapping:
        df = df.rename(columns=column_mapping)
        logger.info("Mapped %d columns to standard names", len(column_mapping))

    return df


def _map_keys(row: Mapping[str, object]) -> dict[str, object]:
    mapping = _column_mapping(row.keys())
    mapped: dict[str, object] = {}
    for key, value in row.items():
        mapped[mapping.get(key) or _normalize_column_name(key)] = value
    return mapped


def _is_missing(value: object) -> bool:
    """None, NaN and pandas NA; containers are never missing."""
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def _extract_process_node(row: Mapping[str, object]) -> ProcessNode | None:
    """Joined hierarchy row, or one assembled from flat process columns."""
    for key in HIERARCHY_KEYS:
        joined = row.get(key)
        if isinstance(joined, ProcessNode):
            return joined
        if isinstance(joined, Mapping):
            return ProcessNode.model_validate(
                {k: v for k, v in joined.items() if not _is_missing(v)}
            )

    flat = {col: row[col] for col in HIERARCHY_COLUMNS if col in row}
    if not (flat.get("process_code") or flat.get("process_name")):
        return None
    return ProcessNode.model_validate(flat)


def raci_fields_from_assignments(
    assignments: Iterable[StakeholderRACI | Mapping[str, object]],
) -> dict[str, str]:
    """Convert legacy per-stakeholder RACI flags into the eight free-text fields.

    Args:
        assignments: Structured rows, one per stakeholder of a process.

    Returns:
        Mapping of "as_is_raci_r" ... "to_be_raci_i" to comma-joined
        stakeholder codes, in input order. Letters nobody holds map to "".
    """
    rows = [
        a if isinstance(a, StakeholderRACI) else StakeholderRACI.model_validate(a)
        for a in assignments
    ]
    fields: dict[str, str] = {}
    for state in ("as_is", "to_be"):
        for role in RACIRole:
            codes = [row.code for row in rows if row.has_role(state, role)]
            fields[f"{state}_raci_{role.field_suffix}"] = ", ".join(codes)
    return fields


def normalize_impact_row(
    row: Mapping[str, object],
    policy: Literal["clamp", "reject"] | None = None,
) -> ProcessImpact:
    """Normalize one raw row into a ProcessImpact.

    Args:
        row: Raw row; column names may use any known alias. A nested
            "process_hierarchy" mapping becomes the joined ProcessNode;
            plain text under "process" is read as the process name.
        policy: Override for settings.out_of_range_policy.

    Returns:
        ProcessImpact with in-range sub-ratings and a recomputed overall rating.

    Raises:
        ValidationError: If the row has no process id or fails model validation.
        RatingOutOfRangeError: If a sub-rating is out of range under "reject".
    """
    data = {k: v for k, v in _map_keys(row).items() if not _is_missing(v)}

    # A plain "Process" column holds the process name, not a joined row
    for key in HIERARCHY_KEYS:
        value = data.get(key)
        if value is not None and not isinstance(value, (ProcessNode, Mapping)):
            del data[key]
            name = str(value).strip()
            if name and not data.get("process_name"):
                data["process_name"] = name

    try:
        node = _extract_process_node(data)
    except PydanticValidationError as e:
        raise ValidationError(
            message=f"Invalid process hierarchy data: {e}",
            field="process_hierarchy",
            user_message="The process hierarchy data of this row is invalid.",
        ) from e
    if node is not None:
        data["process"] = node
        if not data.get("process_id") and node.id:
            data["process_id"] = node.id

    if not data.get("process_id"):
        raise ValidationError(
            message="Row has no process_id",
            field="process_id",
            user_message="Every impact row must reference a process.",
        )
    # Spreadsheets hand numeric ids over as numbers
    data["process_id"] = str(data["process_id"])

    assignments = data.pop(ASSIGNMENTS_KEY, None)
    if assignments and not any(
        data.get(f"{state}_raci_{role.field_suffix}")
        for state in ("as_is", "to_be")
        for role in RACIRole
    ):
        data.update(raci_fields_from_assignments(assignments))  # type: ignore[arg-type]

    ratings = normalize_ratings(data, policy)
    data.update(ratings)

    computed = calculate_overall_impact_rating(ratings)
    supplied = coerce_rating_value(data.get("overall_impact_rating"))
    if supplied is not None and supplied != computed:
        logger.warning(
            "Process %s: stored overall rating %d does not match sub-ratings, using %d",
            data["process_id"],
            supplied,
            computed,
        )
    data["overall_impact_rating"] = computed

    try:
        return ProcessImpact.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            message=f"Invalid impact row for process {data['process_id']}: {e}",
            field="row",
            value=str(data["process_id"]),
            user_message=f"{e.error_count()} field(s) of this row are invalid.",
        ) from e


def normalize_impact_rows(
    rows: Iterable[Mapping[str, object]],
    policy: Literal["clamp", "reject"] | None = None,
) -> list[ProcessImpact]:
    """Normalize a batch of raw rows, skipping the ones that cannot be used.

    Raises:
        ValidationError: If the batch is non-empty and every row failed.
    """
    impacts: list[ProcessImpact] = []
    errors: list[str] = []
    row_count = 0

    for idx, row in enumerate(rows):
        row_count += 1
        try:
            impacts.append(normalize_impact_row(row, policy))
        except ValidationError as e:
            errors.append(f"Row {idx + 1}: {e}")
            logger.warning("Skipping row %d: %s", idx + 1, e)

    if errors and not impacts:
        logger.error("All %d rows failed normalization", row_count)
        raise ValidationError(
            message=f"All rows failed validation: {errors}",
            field="rows",
            user_message="None of the impact rows could be read. Please check the data format.",
        )

    if errors:
        logger.warning("Skipped %d invalid rows out of %d total", len(errors), row_count)

    logger.info("Normalized %d process impacts", len(impacts))
    return impacts


def impacts_from_dataframe(
    df: pd.DataFrame,
    policy: Literal["clamp", "reject"] | None = None,
) -> list[ProcessImpact]:
    """Normalize a DataFrame of impact rows (already read by the import layer).

    Args:
        df: One row per assessed process.
        policy: Override for settings.out_of_range_policy.

    Returns:
        Validated ProcessImpact list.

    Raises:
        ExtractionError: If the frame has no rows.
        ValidationError: If every row failed validation.
    """
    if df.empty:
        raise ExtractionError(
            message="DataFrame has no data rows",
            source="dataframe",
            user_message="The imported sheet has headers but no data rows.",
        )

    df = _map_columns(df)
    records = df.to_dict(orient="records")
    # Remove NaN values and ensure string keys
    rows = [{str(k): v for k, v in record.items() if not _is_missing(v)} for record in records]
    return normalize_impact_rows(rows, policy)
