"""Utility functions."""

from .config import DEFAULT_CONFIG, SchedulingConfig, get_default_config, load_config
from .datetime_utils import minutes_from_day_start, minutes_to_time

__all__ = [
    'DEFAULT_CONFIG',
    'SchedulingConfig',
    'get_default_config',
    'load_config',
    'minutes_from_day_start',
    'minutes_to_time',
]
