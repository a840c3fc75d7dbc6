"""Process hierarchy models for ImpactIQ."""

from pydantic import BaseModel, Field, field_validator


class ProcessNode(BaseModel):
    """One process in an assessment's L0-L3 process hierarchy."""

    id: str | None = Field(default=None, description="Storage identifier")
    assessment_id: str | None = Field(
        default=None, description="Assessment the process belongs to"
    )
    process_code: str = Field(default="", description="Business code, e.g. '1.2.3'")
    process_name: str = Field(default="", description="Human-readable process name")
    level_number: int = Field(
        default=0, ge=0, le=3, description="Hierarchy level (0 = top-level L0)"
    )
    parent_id: str | None = Field(default=None, description="Parent process id")
    sort_order: int = Field(default=0, description="Ordering among siblings")
    department: str | None = Field(default=None, description="Owning department")
    functional_area: str | None = Field(default=None, description="Functional area")

    @field_validator("process_code", "process_name", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> str:
        """Treat None as empty and trim surrounding whitespace."""
        if v is None:
            return ""
        return str(v).strip()

    @property
    def level_label(self) -> str:
        """Level as displayed in the hierarchy ("L0".."L3")."""
        return f"L{self.level_number}"
