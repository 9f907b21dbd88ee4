"""scarab2pivotal - Convert Scarab issue tracker exports to Pivotal Tracker CSV."""

__version__ = "1.0.0"
