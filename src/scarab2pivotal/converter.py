"""End-to-end conversion of a Scarab export into Pivotal Tracker CSV."""

import logging
import sys
from typing import List, Optional, TextIO

from scarab2pivotal.export import write_issues
from scarab2pivotal.extraction import ScarabExtractor
from scarab2pivotal.models import (
    DEFAULT_TRANSLATION,
    ConverterConfig,
    ReconstructedIssue,
    TranslationConfig,
)
from scarab2pivotal.replay import ReplayEngine

logger = logging.getLogger(__name__)


def reconstruct_export(config: ConverterConfig) -> List[ReconstructedIssue]:
    """Parse the export and replay every issue.

    Raises:
        ParseError: If the document or any timestamp cannot be parsed
    """
    extractor = ScarabExtractor(config.input_path)
    issues = list(extractor.extract_issues())
    return ReplayEngine(max_workers=config.max_workers).reconstruct_all(issues)


def convert(
    config: ConverterConfig,
    stream: Optional[TextIO] = None,
    translation: TranslationConfig = DEFAULT_TRANSLATION,
) -> int:
    """Convert an export to CSV.

    Every issue is reconstructed before anything is written, so a fatal parse
    error produces no output at all (the output file is not even created).

    Args:
        config: Validated run options
        stream: Destination stream. Defaults to ``config.output_path``, or
            stdout when that is unset.
        translation: Translation tables

    Returns:
        Number of rows written
    """
    reconstructed = reconstruct_export(config)

    if stream is not None:
        rows = write_issues(reconstructed, stream, config.story_type, translation)
    elif config.output_path is not None:
        with open(config.output_path, "w", encoding="utf-8", newline="") as f:
            rows = write_issues(reconstructed, f, config.story_type, translation)
    else:
        rows = write_issues(reconstructed, sys.stdout, config.story_type, translation)

    logger.info(f"Converted {config.input_path}: {rows} stories written")
    return rows
