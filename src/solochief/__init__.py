"""Solo Chief - strategic task triage."""

__version__ = "0.1.0"
