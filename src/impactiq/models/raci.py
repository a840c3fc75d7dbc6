"""RACI (Responsible / Accountable / Consulted / Informed) models for ImpactIQ."""

from enum import Enum

from pydantic import BaseModel, Field, computed_field, field_validator

from impactiq.models.analysis import PriorityLevel


class RACIRole(str, Enum):
    """One letter of the RACI matrix."""

    RESPONSIBLE = "R"
    ACCOUNTABLE = "A"
    CONSULTED = "C"
    INFORMED = "I"

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def field_suffix(self) -> str:
        """Suffix of the free-text column, e.g. 'r' in 'as_is_raci_r'."""
        return self.value.lower()


class ChangeType(str, Enum):
    """Difference between the As-Is and To-Be value of one RACI field."""

    NEW_ASSIGNMENT = "new-assignment"
    REMOVED_ASSIGNMENT = "removed-assignment"
    ROLE_CHANGE = "role-change"
    NO_CHANGE = "no-change"


class RACIChangeRecord(BaseModel):
    """One detected As-Is vs To-Be difference for one RACI letter of one process."""

    process_id: str = Field(..., description="Process the change belongs to")
    process_code: str = Field(default="", description="Business code of the process")
    process_name: str = Field(default="", description="Name of the process")
    role: RACIRole = Field(..., description="RACI letter that changed")
    as_is_value: str = Field(default="", description="As-Is role codes (free text)")
    to_be_value: str = Field(default="", description="To-Be role codes (free text)")
    change_type: ChangeType = Field(..., description="Kind of change")
    impact_rating: int = Field(
        ..., ge=0, le=5, description="Overall impact rating of the parent process"
    )
    priority: PriorityLevel = Field(..., description="Derived change priority")

    @field_validator("change_type")
    @classmethod
    def reject_no_change(cls, v: ChangeType) -> ChangeType:
        """Unchanged fields are never reported."""
        if v == ChangeType.NO_CHANGE:
            raise ValueError("a change record cannot have change_type 'no-change'")
        return v


class RoleLoad(BaseModel):
    """Aggregate workload of one named role across a set of processes.

    process_count counts distinct processes, total_load counts occurrences,
    so a role present in both As-Is and To-Be of one process adds 1 to the
    former and 2 to the latter.
    """

    role_name: str = Field(..., min_length=1, description="Role / stakeholder code")
    as_is_count: int = Field(default=0, ge=0, description="As-Is occurrences")
    to_be_count: int = Field(default=0, ge=0, description="To-Be occurrences")
    process_count: int = Field(
        default=0, ge=0, description="Distinct processes touching this role"
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_load(self) -> int:
        return self.as_is_count + self.to_be_count

    @property
    def net_change(self) -> int:
        """Positive when the role gains assignments in the To-Be state."""
        return self.to_be_count - self.as_is_count


class StakeholderRACI(BaseModel):
    """Legacy structured RACI row: one stakeholder's flags on one process.

    Only used at the ingestion boundary, where it is converted into the
    free-text RACI fields of ProcessImpact.
    """

    stakeholder_id: str = Field(..., description="Stakeholder identifier")
    stakeholder_code: str = Field(
        default="", description="Short role code written into the RACI text fields"
    )
    as_is_responsible: bool = False
    as_is_accountable: bool = False
    as_is_consulted: bool = False
    as_is_informed: bool = False
    to_be_responsible: bool = False
    to_be_accountable: bool = False
    to_be_consulted: bool = False
    to_be_informed: bool = False

    @property
    def code(self) -> str:
        return self.stakeholder_code.strip() or self.stakeholder_id

    def has_role(self, state: str, role: RACIRole) -> bool:
        """Check a flag, e.g. has_role("to_be", RACIRole.ACCOUNTABLE)."""
        return bool(getattr(self, f"{state}_{role.label.lower()}"))
