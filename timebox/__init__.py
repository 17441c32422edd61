"""Scheduling core for a calendar of time-boxed tasks."""

__version__ = "0.1.0"
