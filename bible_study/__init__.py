"""Bible study local server: reading plans, notes, highlights."""

__version__ = "0.1.0"
