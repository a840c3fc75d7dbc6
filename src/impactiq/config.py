from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from impactiq.exceptions import ConfigurationError


class PriorityThresholds(BaseModel):
    """Minimum combined score (impact rating + change weight) per priority band."""

    critical: int = Field(default=7, ge=0)
    high: int = Field(default=5, ge=0)
    medium: int = Field(default=3, ge=0)

    @model_validator(mode="after")
    def check_order(self) -> "PriorityThresholds":
        if not self.critical > self.high > self.medium:
            raise ConfigurationError(
                f"Priority thresholds must be strictly descending, got "
                f"critical={self.critical}, high={self.high}, medium={self.medium}",
                config_key="priority_thresholds",
            )
        return self


class SeverityRatioThresholds(BaseModel):
    """Minimum share of high-impact processes per portfolio severity band."""

    critical: float = Field(default=0.5, ge=0.0, le=1.0)
    high: float = Field(default=0.3, ge=0.0, le=1.0)
    medium: float = Field(default=0.1, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def check_order(self) -> "SeverityRatioThresholds":
        if not self.critical > self.high > self.medium:
            raise ConfigurationError(
                f"Severity ratio thresholds must be strictly descending, got "
                f"critical={self.critical}, high={self.high}, medium={self.medium}",
                config_key="severity_ratio_thresholds",
            )
        return self


class ChangeWeights(BaseModel):
    """Weight added to the impact rating when prioritizing a RACI change."""

    new_assignment: int = Field(default=2, ge=0)
    role_change: int = Field(default=2, ge=0)
    removed_assignment: int = Field(default=1, ge=0)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    log_level: str = "INFO"  # DEBUG for development

    # Rating ingestion
    out_of_range_policy: Literal["clamp", "reject"] = Field(
        default="clamp",
        description="What to do with sub-ratings outside 0-3: clamp (and warn) or reject.",
    )

    # Policy constants (JSON format in env vars)
    # Example: PRIORITY_THRESHOLDS='{"critical": 8, "high": 5, "medium": 3}'
    priority_thresholds: PriorityThresholds = Field(default_factory=PriorityThresholds)
    severity_ratio_thresholds: SeverityRatioThresholds = Field(
        default_factory=SeverityRatioThresholds
    )
    change_weights: ChangeWeights = Field(default_factory=ChangeWeights)

    # Dashboards
    high_impact_threshold: int = Field(
        default=4,
        ge=0,
        le=5,
        description="Overall rating at or above which a process counts as high impact",
    )
    role_load_limit: int = Field(
        default=20, ge=1, description="Number of most loaded roles shown on dashboards"
    )
    system_load_limit: int = Field(
        default=10, ge=1, description="Number of most impacted systems shown on dashboards"
    )


settings = Settings()
