"""Status and estimate translation for Pivotal Tracker."""

from scarab2pivotal.translation.pivotal import (
    bucket_estimate,
    estimate_for,
    parse_effort,
    translate_status,
)

__all__ = ["bucket_estimate", "estimate_for", "parse_effort", "translate_status"]
