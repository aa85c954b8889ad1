"""Terminal tracker for a single flight with a landing alert."""

__version__ = "0.1.0"
