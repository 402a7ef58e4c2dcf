"""Utility functions for the Tetris engine."""
from .logger import EventLogger, MetricsTracker, convert_to_serializable

__all__ = [
    "EventLogger",
    "MetricsTracker",
    "convert_to_serializable",
]
