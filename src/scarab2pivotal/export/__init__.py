"""CSV export for Pivotal Tracker."""

from scarab2pivotal.export.pivotal_csv import PIVOTAL_COLUMNS, PivotalCsvWriter, build_row, write_issues

__all__ = ["PIVOTAL_COLUMNS", "PivotalCsvWriter", "build_row", "write_issues"]
