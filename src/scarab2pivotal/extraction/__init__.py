"""Issue extraction from Scarab exports."""

from scarab2pivotal.extraction.scarab_extractor import ScarabExtractor, parse_export

__all__ = ["ScarabExtractor", "parse_export"]
