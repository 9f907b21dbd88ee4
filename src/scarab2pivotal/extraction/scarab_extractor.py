"""Scarab XML export data extraction."""

import logging
import re
from pathlib import Path
from typing import Iterator, List, Optional, Union

from lxml import etree

from scarab2pivotal.exceptions import ExportParseError
from scarab2pivotal.models import Activity, ActivityGroup, Issue

logger = logging.getLogger(__name__)

ROOT_TAG = "scarab-issues"

Source = Union[str, Path, bytes, etree._Element]

_OUTER_TAGS = re.compile(r"^<[^>]*>(?P<content>.*)</[^>]*>$", re.DOTALL)
_CDATA = re.compile(r"<!\[CDATA\[(?P<content>.*?)\]\]>", re.DOTALL)


def _local_name(element: etree._Element) -> Optional[str]:
    # Comments and processing instructions have non-string tags
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def _children(element: Optional[etree._Element], tag: str) -> Iterator[etree._Element]:
    """Yield direct children with the given local name, in document order."""
    if element is None:
        return
    for child in element:
        if _local_name(child) == tag:
            yield child


def _child(element: Optional[etree._Element], *path: str) -> Optional[etree._Element]:
    """Follow a path of child tag names, returning the first match or None."""
    for tag in path:
        element = next(_children(element, tag), None)
        if element is None:
            return None
    return element


def _text(element: Optional[etree._Element]) -> Optional[str]:
    if element is None:
        return None
    return "".join(element.itertext())


def _encoded_content(element: Optional[etree._Element]) -> Optional[str]:
    """Return an element's content as written in the file, entities still encoded.

    CDATA sections are unwrapped but their content is kept verbatim, so every
    value is entity-encoded exactly once and is decoded exactly once on replay.
    """
    if element is None:
        return None
    markup = etree.tostring(element, encoding="unicode", with_tail=False)
    match = _OUTER_TAGS.match(markup)
    if match is None:
        # Self-closing, no content
        return ""
    return _CDATA.sub(lambda m: m.group("content"), match.group("content"))


class ScarabExtractor:
    """Extracts issues and their activity history from a Scarab export."""

    def __init__(self, source: Source) -> None:
        """Parse a Scarab export.

        Args:
            source: Path to the XML export, its raw bytes, or an already
                parsed root element

        Raises:
            ExportParseError: If the document is not well-formed or not a
                Scarab issue export
        """
        if isinstance(source, etree._Element):
            self.root = self._check_root(source, None)
            return

        # CDATA is kept so values can be read back in their encoded form
        parser = etree.XMLParser(
            resolve_entities=False, no_network=True, huge_tree=True, strip_cdata=False
        )
        label = None if isinstance(source, bytes) else str(source)

        try:
            if isinstance(source, bytes):
                root = etree.fromstring(source, parser)
            else:
                root = etree.parse(str(source), parser).getroot()
        except (etree.XMLSyntaxError, OSError) as e:
            raise ExportParseError(f"Could not parse export: {e}", label) from e

        self.root = self._check_root(root, label)

    @classmethod
    def from_element(cls, root: etree._Element) -> "ScarabExtractor":
        """Wrap an already-parsed document."""
        return cls(root)

    @staticmethod
    def _check_root(root: Optional[etree._Element], label: Optional[str]) -> etree._Element:
        if root is None or _local_name(root) != ROOT_TAG:
            found = None if root is None else _local_name(root)
            raise ExportParseError(f"Expected <{ROOT_TAG}> root element, found <{found}>", label)
        return root

    def extract_issues(self) -> Iterator[Issue]:
        """Extract every issue in document order.

        Yields:
            Issue objects with their (unsorted) activity groups
        """
        count = 0
        for issues in _children(self.root, "issues"):
            for issue in _children(issues, "issue"):
                yield self._extract_issue(issue)
                count += 1

        logger.info(f"Extracted {count} issues")

    def _extract_issue(self, element: etree._Element) -> Issue:
        issue_id = (_text(_child(element, "id")) or "").strip()

        groups = [
            self._extract_activity_group(activity_set)
            for activity_sets in _children(element, "activity-sets")
            for activity_set in _children(activity_sets, "activity-set")
        ]

        logger.debug(f"Extracted issue {issue_id}: {len(groups)} activity groups")
        return Issue(id=issue_id, activity_groups=groups)

    def _extract_activity_group(self, element: etree._Element) -> ActivityGroup:
        # A missing timestamp is left empty and rejected when the group is ordered
        created = _text(_child(element, "created-date", "timestamp")) or ""

        activities = [
            self._extract_activity(activity)
            for container in _children(element, "activities")
            for activity in _children(container, "activity")
        ]
        return ActivityGroup(created=created, activities=activities)

    def _extract_activity(self, element: etree._Element) -> Activity:
        name = _text(_child(element, "attribute", "name"))
        if name is not None:
            name = name.strip()

        return Activity(
            attribute_name=name,
            new_value=_encoded_content(_child(element, "new-value")) or "",
        )


def parse_export(source: Source) -> List[Issue]:
    """Parse a Scarab export and return all of its issues."""
    return list(ScarabExtractor(source).extract_issues())
