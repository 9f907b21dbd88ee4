"""Translation of Scarab status and effort values into Pivotal Tracker terms."""

import re
from typing import Mapping, Optional, Union

from scarab2pivotal.models.config import DEFAULT_TRANSLATION, TranslationConfig

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def translate_status(
    label: Optional[str],
    config: TranslationConfig = DEFAULT_TRANSLATION,
) -> Optional[str]:
    """Map a Scarab status label to a Pivotal lifecycle state.

    Args:
        label: Scarab status, or None if the issue never recorded one
        config: Translation tables

    Returns:
        Lifecycle state, or None for unknown or missing labels
    """
    if label is None:
        return None
    return config.status_map.get(label)


def parse_effort(raw: Union[str, int, None], default: int = 1) -> int:
    """Read the integer prefix of an effort value.

    ``"9"`` and ``"9 hours"`` both give 9, ``"2.5"`` gives 2. Values with no
    leading digits fall back to ``default``.
    """
    if raw is None:
        return default
    if isinstance(raw, int):
        return raw

    match = _LEADING_INTEGER.match(raw)
    if not match:
        return default
    return int(match.group(1))


def bucket_estimate(
    effort: int,
    state: Optional[str],
    config: TranslationConfig = DEFAULT_TRANSLATION,
) -> str:
    """Bucket an effort value into a point estimate for the given state.

    Args:
        effort: Raw effort value
        state: Pivotal lifecycle state of the story
        config: Translation tables

    Returns:
        Estimate token, or "" when the state does not carry an estimate
    """
    if state not in config.estimated_states:
        return ""

    for bucket in config.estimate_buckets:
        if bucket.contains(effort):
            return str(bucket.points)
    return str(config.overflow_estimate)


def estimate_for(
    attributes: Mapping[str, str],
    state: Optional[str],
    config: TranslationConfig = DEFAULT_TRANSLATION,
) -> str:
    """Estimate for a reconstructed issue, reading its recorded effort."""
    effort = parse_effort(attributes.get(config.effort_attribute), config.default_effort)
    return bucket_estimate(effort, state, config)
