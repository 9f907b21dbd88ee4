"""Chronological replay of issue activity history."""

from scarab2pivotal.replay.engine import (
    ReplayEngine,
    decode_value,
    is_ignored_attribute,
    order_activity_groups,
    replay_activity_groups,
)
from scarab2pivotal.replay.timestamps import parse_timestamp

__all__ = [
    "ReplayEngine",
    "decode_value",
    "is_ignored_attribute",
    "order_activity_groups",
    "replay_activity_groups",
    "parse_timestamp",
]
