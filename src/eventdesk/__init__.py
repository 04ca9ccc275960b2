"""Event, participant and registration records persisted to flat CSV files."""

__version__ = "0.1.0"
