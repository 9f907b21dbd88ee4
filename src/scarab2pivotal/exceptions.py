"""Exceptions raised while reading a Scarab export."""

from typing import Optional


class Scarab2PivotalError(Exception):
    """Base exception for conversion errors"""
    pass


class ParseError(Scarab2PivotalError, ValueError):
    """Raised when the input cannot be interpreted. Always fatal for a run."""
    pass


class ExportParseError(ParseError):
    """Raised when the export document is not a readable Scarab issue tree"""
    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{message} ({source})"
        super().__init__(message)


class TimestampParseError(ParseError):
    """Raised when an activity set timestamp cannot be ordered"""
    def __init__(self, text: Optional[str]):
        self.text = text
        super().__init__(f"Unrecognized timestamp: {text!r}")
