"""localekit - locale resolution, translation lookup and locale-aware formatting."""

__version__ = "1.0.0"
