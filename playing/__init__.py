"""Command-line control for MPRIS media players."""

__version__ = "0.3.0"
