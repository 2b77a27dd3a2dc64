"""lift-diary: date-keyed exercise log with swappable storage backends."""

__version__ = "0.1.0"
