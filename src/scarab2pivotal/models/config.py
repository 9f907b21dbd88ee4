"""Configuration models."""

import os
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoryType(str, Enum):
    """Pivotal Tracker story types."""

    FEATURE = "feature"
    CHORE = "chore"
    BUG = "bug"


# Pivotal lifecycle states
UNSCHEDULED = "unscheduled"
UNSTARTED = "unstarted"
STARTED = "started"
FINISHED = "finished"
DELIVERED = "delivered"
ACCEPTED = "accepted"

LIFECYCLE_STATES = (UNSCHEDULED, UNSTARTED, STARTED, FINISHED, DELIVERED, ACCEPTED)

SCARAB_STATUS_MAP: Dict[str, str] = {
    "Submitted": UNSCHEDULED,
    "Developer Submitted": UNSCHEDULED,
    "SMEs Need Clarity": UNSCHEDULED,
    "Need Clarity": UNSCHEDULED,
    "Clarified": UNSTARTED,
    "UAT Specified": UNSTARTED,
    "In Development": STARTED,
    "Developed": FINISHED,
    "Likely Slipping": STARTED,
    "Estimate Requested": UNSCHEDULED,
    "Tested": DELIVERED,
    "Deployed": ACCEPTED,
    "Torn Up": UNSCHEDULED,
}


class EstimateBucket(BaseModel):
    """Inclusive effort range mapped to a point estimate."""

    model_config = ConfigDict(frozen=True)

    low: int = Field(..., description="Lowest effort in the bucket")
    high: int = Field(..., description="Highest effort in the bucket")
    points: int = Field(..., description="Point estimate for the bucket")

    def contains(self, effort: int) -> bool:
        return self.low <= effort <= self.high


DEFAULT_ESTIMATE_BUCKETS: Tuple[EstimateBucket, ...] = (
    EstimateBucket(low=0, high=0, points=0),
    EstimateBucket(low=1, high=1, points=1),
    EstimateBucket(low=2, high=6, points=2),
    EstimateBucket(low=7, high=12, points=3),
    EstimateBucket(low=13, high=24, points=5),
)


class TranslationConfig(BaseModel):
    """Tables used to translate Scarab attributes into Pivotal fields."""

    model_config = ConfigDict(frozen=True)

    status_map: Dict[str, str] = Field(
        default_factory=lambda: dict(SCARAB_STATUS_MAP),
        description="Scarab status label to Pivotal lifecycle state",
    )
    estimated_states: FrozenSet[str] = Field(
        default=frozenset({STARTED, FINISHED, ACCEPTED}),
        description="Lifecycle states that carry a point estimate",
    )
    estimate_buckets: Tuple[EstimateBucket, ...] = Field(
        default=DEFAULT_ESTIMATE_BUCKETS,
        description="Effort ranges checked in order",
    )
    overflow_estimate: int = Field(8, description="Estimate for effort outside every bucket")
    default_effort: int = Field(1, description="Effort assumed when none was recorded")
    status_attribute: str = Field("Status", description="Attribute holding the Scarab status")
    effort_attribute: str = Field("Estimated effort", description="Attribute holding the effort")


DEFAULT_TRANSLATION = TranslationConfig()


class ConverterConfig(BaseModel):
    """Validated options for a single conversion run."""

    input_path: Path = Field(..., description="Scarab XML export to convert")
    output_path: Optional[Path] = Field(None, description="CSV destination (stdout when None)")
    story_type: StoryType = Field(StoryType.FEATURE, description="Story type for every row")
    max_workers: int = Field(1, ge=1, description="Worker threads used for replay")

    @field_validator("input_path")
    @classmethod
    def _check_input(cls, path: Path) -> Path:
        if not path.exists():
            raise ValueError(f"Specified input file '{path}' does not exist")
        if path.is_dir():
            raise ValueError(f"Specified input file '{path}' is a directory, not a file")
        if not os.access(path, os.R_OK):
            raise ValueError(f"Specified input file '{path}' is not readable")
        return path

    @field_validator("output_path")
    @classmethod
    def _check_output(cls, path: Optional[Path]) -> Optional[Path]:
        if path is None:
            return path
        if path.exists():
            if path.is_dir() or not os.access(path, os.W_OK):
                raise ValueError(f"Specified filename '{path}' is not writable")
        else:
            parent = path.parent
            if not parent.is_dir() or not os.access(parent, os.W_OK):
                raise ValueError(f"Location of specified filename '{path}' is not writable")
        return path


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SCARAB2PIVOTAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Conversion defaults
    story_type: StoryType = StoryType.FEATURE
    max_workers: int = 1

    # Logging
    log_level: str = "WARNING"
    log_format: str = "console"
