"""Process impact models for ImpactIQ."""

import logging
import math
import numbers
import re
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from impactiq.config import settings
from impactiq.exceptions import RatingOutOfRangeError
from impactiq.models.analysis import PriorityLevel
from impactiq.models.hierarchy import ProcessNode
from impactiq.models.raci import RACIRole

logger = logging.getLogger(__name__)

# The five 0-3 dimensions that make up the overall impact rating
SUB_RATING_FIELDS: tuple[str, ...] = (
    "process_rating",
    "role_rating",
    "new_role_rating",
    "workload_rating",
    "system_complexity_rating",
)

SUB_RATING_MIN = 0
SUB_RATING_MAX = 3
OVERALL_RATING_MAX = 5

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_rating_value(value: object) -> int | None:
    """Read a rating from loosely typed input.

    Integers pass through, floats are truncated, text is read up to the
    first non-digit ("2", "2.7", "3 - major" all give an int). Anything
    else (None, NaN, booleans, unparsable text) is None. Range is not
    checked here.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        as_float = float(value)
        if math.isnan(as_float) or math.isinf(as_float):
            return None
        return int(as_float)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


def clamp_sub_rating(
    name: str,
    value: int,
    policy: Literal["clamp", "reject"] | None = None,
) -> int:
    """Bring one sub-rating into 0-3 according to the out-of-range policy.

    Raises:
        RatingOutOfRangeError: If the value is out of range and policy is "reject".
    """
    if SUB_RATING_MIN <= value <= SUB_RATING_MAX:
        return value

    policy = policy or settings.out_of_range_policy
    if policy == "reject":
        raise RatingOutOfRangeError(
            f"{name}={value} is outside {SUB_RATING_MIN}-{SUB_RATING_MAX}",
            field=name,
            value=str(value),
            user_message=f"{name.replace('_', ' ').capitalize()} must be between "
            f"{SUB_RATING_MIN} and {SUB_RATING_MAX}.",
        )

    clamped = max(SUB_RATING_MIN, min(SUB_RATING_MAX, value))
    logger.warning("Clamped %s from %d to %d", name, value, clamped)
    return clamped


def _text_or_empty(v: object) -> str:
    if v is None:
        return ""
    if isinstance(v, float) and math.isnan(v):
        return ""
    return str(v).strip()


class WorkloadDirection(str, Enum):
    """How the workload of the affected roles moves."""

    INCREASE = "increase"
    DECREASE = "decrease"
    NEUTRAL = "neutral"


class ImpactDirection(str, Enum):
    """Whether the change is good or bad for the business."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class ImpactRatings(BaseModel):
    """The five sub-ratings of one process, all required-but-nullable.

    None means "not rated" and counts as 0. Values are not range-checked;
    out-of-range handling belongs to the rating aggregator.
    """

    process_rating: int | None
    role_rating: int | None
    new_role_rating: int | None
    workload_rating: int | None
    system_complexity_rating: int | None

    @field_validator(*SUB_RATING_FIELDS, mode="before")
    @classmethod
    def coerce(cls, v: object) -> int | None:
        return coerce_rating_value(v)

    @classmethod
    def empty(cls) -> "ImpactRatings":
        """All five ratings unset."""
        return cls(**{name: None for name in SUB_RATING_FIELDS})

    @classmethod
    def from_mapping(cls, data: dict[str, object]) -> "ImpactRatings":
        """Build from a raw row; missing keys become None, extra keys are ignored."""
        return cls(**{name: data.get(name) for name in SUB_RATING_FIELDS})


class ProcessImpact(BaseModel):
    """One assessed process: As-Is vs To-Be comparison and its ratings."""

    id: str | None = Field(default=None, description="Storage identifier")
    process_id: str = Field(..., min_length=1, description="Assessed process id")
    assessment_id: str | None = Field(default=None, description="Parent assessment")
    process: ProcessNode | None = Field(
        default=None, description="Joined process hierarchy row, if fetched"
    )

    as_is_description: str = Field(default="", description="Current-state description")
    to_be_description: str = Field(default="", description="Future-state description")
    as_is_system: str | None = Field(default=None, description="Current core system")
    to_be_system: str | None = Field(default=None, description="Future core system")

    process_rating: int = Field(
        default=0, ge=0, le=3, description="Process change complexity (0-3)"
    )
    role_rating: int = Field(default=0, ge=0, le=3, description="Role change (0-3)")
    new_role_rating: int = Field(
        default=0, ge=0, le=3, description="Impact of newly created roles (0-3)"
    )
    workload_rating: int = Field(default=0, ge=0, le=3, description="Workload change (0-3)")
    system_complexity_rating: int = Field(
        default=0, ge=0, le=3, description="System change complexity (0-3)"
    )
    workload_direction: WorkloadDirection = WorkloadDirection.NEUTRAL
    overall_impact_rating: int = Field(
        default=0,
        ge=0,
        le=5,
        description="Derived from the five sub-ratings; recomputed before any analysis",
    )
    impact_direction: ImpactDirection = ImpactDirection.NEUTRAL

    as_is_raci_r: str = ""
    as_is_raci_a: str = ""
    as_is_raci_c: str = ""
    as_is_raci_i: str = ""
    to_be_raci_r: str = ""
    to_be_raci_a: str = ""
    to_be_raci_c: str = ""
    to_be_raci_i: str = ""

    change_statement: str = ""
    benefits: str = ""
    comments: str = ""
    training_required: bool = False
    data_migration_required: bool = False
    priority: PriorityLevel = PriorityLevel.MEDIUM

    @field_validator(*SUB_RATING_FIELDS, mode="before")
    @classmethod
    def sub_rating_in_range(cls, v: object, info: ValidationInfo) -> int:
        """Unset is 0; out-of-range values follow settings.out_of_range_policy."""
        coerced = coerce_rating_value(v)
        if coerced is None:
            return 0
        return clamp_sub_rating(info.field_name, coerced)

    @field_validator("overall_impact_rating", mode="before")
    @classmethod
    def missing_rating_is_zero(cls, v: object) -> int:
        coerced = coerce_rating_value(v)
        return 0 if coerced is None else coerced

    @field_validator(
        "as_is_raci_r",
        "as_is_raci_a",
        "as_is_raci_c",
        "as_is_raci_i",
        "to_be_raci_r",
        "to_be_raci_a",
        "to_be_raci_c",
        "to_be_raci_i",
        "as_is_description",
        "to_be_description",
        "change_statement",
        "benefits",
        "comments",
        mode="before",
    )
    @classmethod
    def none_is_empty(cls, v: object) -> str:
        return _text_or_empty(v)

    @field_validator("as_is_system", "to_be_system", mode="before")
    @classmethod
    def blank_system_is_none(cls, v: object) -> str | None:
        text = _text_or_empty(v)
        return text or None

    @field_validator("workload_direction", "impact_direction", "priority", mode="before")
    @classmethod
    def default_blank_enum(cls, v: object, info: ValidationInfo) -> object:
        """Blank enum values fall back to the field default."""
        if isinstance(v, Enum):
            return v
        text = _text_or_empty(v).lower()
        if not text:
            return cls.model_fields[info.field_name].default
        return text

    @property
    def ratings(self) -> ImpactRatings:
        return ImpactRatings(**{name: getattr(self, name) for name in SUB_RATING_FIELDS})

    @property
    def process_code(self) -> str:
        """Business code of the process, falling back to its id."""
        if self.process is not None and self.process.process_code:
            return self.process.process_code
        return self.process_id

    @property
    def process_name(self) -> str:
        return self.process.process_name if self.process is not None else ""

    @property
    def level_number(self) -> int | None:
        return self.process.level_number if self.process is not None else None

    @property
    def department(self) -> str | None:
        return self.process.department if self.process is not None else None

    @property
    def has_system_change(self) -> bool:
        return self.as_is_system != self.to_be_system

    def raci_pair(self, role: RACIRole | str) -> tuple[str, str]:
        """(As-Is, To-Be) free-text values for one RACI letter."""
        suffix = RACIRole(role.upper()).field_suffix
        return (
            getattr(self, f"as_is_raci_{suffix}"),
            getattr(self, f"to_be_raci_{suffix}"),
        )

    @property
    def has_any_raci(self) -> bool:
        return any(value for role in RACIRole for value in self.raci_pair(role))
