"""Discovery, validation and grouping of pluggable lint extensions."""

__version__ = "0.1.0"
