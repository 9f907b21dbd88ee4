"""Data models for Scarab issues and their activity history."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Activity(BaseModel):
    """A single attribute change recorded against an issue."""

    model_config = ConfigDict(frozen=True)

    attribute_name: Optional[str] = Field(None, description="Name of the attribute that changed")
    new_value: str = Field("", description="New attribute value, still HTML-entity encoded")


class ActivityGroup(BaseModel):
    """A timestamped batch of activities (a Scarab activity-set)."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "created": "2005-03-18T15:26:12 PST",
                "activities": [
                    {"attribute_name": "Status", "new_value": "In Development"},
                    {"attribute_name": "Summary", "new_value": "Login page &amp; session timeout"},
                ],
            }
        },
    )

    created: str = Field(..., description="Raw created-date timestamp text")
    activities: List[Activity] = Field(default_factory=list, description="Activities in document order")


class Issue(BaseModel):
    """An issue as found in the export, with its unordered activity groups."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Source issue identifier (opaque)")
    activity_groups: List[ActivityGroup] = Field(
        default_factory=list, description="Activity groups in document order (not chronological)"
    )


class ReconstructedIssue(BaseModel):
    """Current state of an issue, derived by replaying its history."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Source issue identifier")
    attributes: Dict[str, str] = Field(
        default_factory=dict, description="Final decoded value per attribute name"
    )

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return an attribute value or ``default`` when it was never recorded."""
        return self.attributes.get(name, default)

    def __getitem__(self, name: str) -> str:
        return self.attributes[name]

    def __contains__(self, name: object) -> bool:
        return name in self.attributes

    def __len__(self) -> int:
        return len(self.attributes)
