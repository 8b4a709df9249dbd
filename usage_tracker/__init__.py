"""Social media usage tracker: usage logging API and analytics engine."""

__version__ = "1.0.0"
