"""EGN - parse, validate, generate and describe Bulgarian national identifier codes."""

__version__ = "1.0.0"
