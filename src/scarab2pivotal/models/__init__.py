"""Data models for Scarab exports and conversion settings."""

from scarab2pivotal.models.config import (
    DEFAULT_TRANSLATION,
    ConverterConfig,
    EstimateBucket,
    Settings,
    StoryType,
    TranslationConfig,
)
from scarab2pivotal.models.issue import Activity, ActivityGroup, Issue, ReconstructedIssue

__all__ = [
    "Activity",
    "ActivityGroup",
    "Issue",
    "ReconstructedIssue",
    "ConverterConfig",
    "EstimateBucket",
    "Settings",
    "StoryType",
    "TranslationConfig",
    "DEFAULT_TRANSLATION",
]
