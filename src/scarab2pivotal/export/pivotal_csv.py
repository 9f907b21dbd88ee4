"""Pivotal Tracker CSV import file writer."""

import csv
import logging
from typing import Dict, Iterable, Optional, TextIO

from scarab2pivotal.models import DEFAULT_TRANSLATION, ReconstructedIssue, StoryType, TranslationConfig
from scarab2pivotal.translation import estimate_for, translate_status

logger = logging.getLogger(__name__)

PIVOTAL_COLUMNS = (
    "Id",
    "Story",
    "Labels",
    "Iteration",
    "Iteration Start",
    "Iteration End",
    "Story Type",
    "Estimate",
    "Current State",
    "Created at",
    "Accepted at",
    "Deadline",
    "Requested By",
    "Owned By",
    "Description",
    "URL",
    "Note",
)


def _csv_field(value: Optional[str]) -> str:
    # Replayed values arrive with quotes already doubled; csv re-quotes them
    if not value:
        return ""
    return value.replace('""', '"')


def build_row(
    row_id: int,
    issue: ReconstructedIssue,
    story_type: StoryType = StoryType.FEATURE,
    config: TranslationConfig = DEFAULT_TRANSLATION,
) -> Dict[str, str]:
    """Build one CSV row for a reconstructed issue.

    Args:
        row_id: Sequential row number (not the Scarab issue id)
        issue: Reconstructed issue
        story_type: Story type written for every row
        config: Translation tables

    Returns:
        Mapping of column name to value, with every column present
    """
    state = translate_status(issue.get(config.status_attribute), config)

    row = dict.fromkeys(PIVOTAL_COLUMNS, "")
    row.update(
        {
            "Id": str(row_id),
            "Story": _csv_field(issue.get("Summary")),
            "Story Type": StoryType(story_type).value,
            "Estimate": estimate_for(issue.attributes, state, config),
            "Current State": state or "",
            "Description": _csv_field(issue.get("Description")),
        }
    )
    return row


class PivotalCsvWriter:
    """Writes reconstructed issues as Pivotal Tracker CSV rows."""

    def __init__(
        self,
        stream: TextIO,
        story_type: StoryType = StoryType.FEATURE,
        config: TranslationConfig = DEFAULT_TRANSLATION,
    ) -> None:
        """Initialize the writer and emit the header row.

        Args:
            stream: Text stream opened with ``newline=""``
            story_type: Story type written for every row
            config: Translation tables
        """
        self.story_type = StoryType(story_type)
        self.config = config
        self.rows_written = 0
        self._writer = csv.DictWriter(stream, fieldnames=PIVOTAL_COLUMNS, lineterminator="\n")
        self._writer.writeheader()

    def write(self, issue: ReconstructedIssue) -> None:
        """Write one issue, assigning it the next row id."""
        self.rows_written += 1
        self._writer.writerow(build_row(self.rows_written, issue, self.story_type, self.config))
        logger.debug(f"Wrote row {self.rows_written} for issue {issue.id}")

    def write_all(self, issues: Iterable[ReconstructedIssue]) -> int:
        """Write every issue and return the number of rows written."""
        for issue in issues:
            self.write(issue)
        return self.rows_written


def write_issues(
    issues: Iterable[ReconstructedIssue],
    stream: TextIO,
    story_type: StoryType = StoryType.FEATURE,
    config: TranslationConfig = DEFAULT_TRANSLATION,
) -> int:
    """Write a complete CSV file (header plus one row per issue)."""
    return PivotalCsvWriter(stream, story_type, config).write_all(issues)
