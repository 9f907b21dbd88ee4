"""Replay of issue activity history into current attribute values.

Each issue carries several activity sets, each stamped with the time it was
created. Replaying every set in chronological order and letting later writes
overwrite earlier ones for the same attribute gives the issue's current state.
"""

import html
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Sequence

from scarab2pivotal.models import ActivityGroup, Issue, ReconstructedIssue
from scarab2pivotal.replay.timestamps import parse_timestamp

logger = logging.getLogger(__name__)

IGNORED_ATTRIBUTE_PREFIX = "null"


def decode_value(raw: str) -> str:
    """Decode HTML entities and double literal quotes for CSV quoting."""
    return html.unescape(raw).replace('"', '""')


def is_ignored_attribute(name: Optional[str], sentinel: str = IGNORED_ATTRIBUTE_PREFIX) -> bool:
    """Check whether an activity's attribute name marks a placeholder event.

    Args:
        name: Attribute name, or None when the activity has none
        sentinel: Reserved prefix, matched case-insensitively

    Returns:
        True if the activity must not touch the attribute mapping
    """
    if name is None or not name.strip():
        return True
    return name.lower().startswith(sentinel.lower())


def order_activity_groups(groups: Iterable[ActivityGroup]) -> List[ActivityGroup]:
    """Sort activity groups oldest first.

    The sort is stable: groups with identical timestamps keep their input
    order, so the later one in the document wins a simultaneous write.

    Raises:
        TimestampParseError: If any group's timestamp cannot be parsed
    """
    keyed = [(parse_timestamp(group.created), index, group) for index, group in enumerate(groups)]
    keyed.sort(key=lambda item: (item[0], item[1]))
    return [group for _, _, group in keyed]


def replay_activity_groups(
    groups: Iterable[ActivityGroup],
    sentinel: str = IGNORED_ATTRIBUTE_PREFIX,
) -> Dict[str, str]:
    """Fold all activities of one issue into a last-writer-wins mapping.

    Args:
        groups: The issue's activity groups, in any order
        sentinel: Prefix of attribute names to skip

    Returns:
        Attribute name to decoded value
    """
    attributes: Dict[str, str] = {}

    for group in order_activity_groups(groups):
        for activity in group.activities:
            if is_ignored_attribute(activity.attribute_name, sentinel):
                continue
            attributes[activity.attribute_name] = decode_value(activity.new_value)

    return attributes


class ReplayEngine:
    """Reconstructs the current state of issues from their activity history."""

    def __init__(self, max_workers: int = 1, sentinel: str = IGNORED_ATTRIBUTE_PREFIX) -> None:
        """Initialize the engine.

        Args:
            max_workers: Threads used by reconstruct_all (1 replays inline)
            sentinel: Prefix of attribute names to skip
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.max_workers = max_workers
        self.sentinel = sentinel

    def reconstruct(self, issue: Issue) -> ReconstructedIssue:
        """Replay a single issue."""
        attributes = replay_activity_groups(issue.activity_groups, self.sentinel)
        logger.debug(
            f"Replayed issue {issue.id}: {len(issue.activity_groups)} activity groups, "
            f"{len(attributes)} attributes"
        )
        return ReconstructedIssue(id=issue.id, attributes=attributes)

    def reconstruct_all(self, issues: Sequence[Issue]) -> List[ReconstructedIssue]:
        """Replay every issue, returning results in input order.

        Issues share no state, so with more than one worker they are replayed
        on a thread pool. The first timestamp failure aborts the whole batch.
        """
        if self.max_workers == 1 or len(issues) < 2:
            results = [self.reconstruct(issue) for issue in issues]
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                results = list(pool.map(self.reconstruct, issues))

        logger.info(f"Reconstructed {len(results)} issues ({self.max_workers} workers)")
        return results
