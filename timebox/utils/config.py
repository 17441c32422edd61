"""Configuration management."""

import copy
import json
import yaml
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from ..models.task import Category, Priority


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            return yaml.safe_load(f) or {}
        elif path.suffix.lower() == '.json':
            return json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'day_window': {
            'start_hour': 8,
            'end_hour': 22,
        },
        'intent': {
            'default_duration_minutes': 60,
            'max_alternatives': 3,
            'default_title': 'New Task',
            'default_priority': 'medium',
            'draft_description': 'Added via AI assistant',
            # Checked in this order; the first category with a hit wins.
            'category_keywords': {
                'work': ['meeting', 'call', 'standup', 'sync', 'review', 'client'],
                'health': ['gym', 'exercise', 'workout', 'run', 'yoga', 'health', 'doctor'],
                'personal': ['lunch', 'dinner', 'breakfast', 'coffee', 'birthday', 'party'],
            },
        },
        'reminders': {
            'lead_minutes': 15,
            'poll_interval_seconds': 30,
        },
        'colors': {
            'category': {
                'work': '#4A90D9',
                'health': '#5BB97B',
                'personal': '#7C5CBF',
                'general': '#94A3B8',
            },
            'priority': {
                'high': '#E8505B',
                'medium': '#E8A838',
                'low': '#5BB97B',
            },
        },
    }


def merge_config(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``overrides`` onto a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


@dataclass(frozen=True)
class SchedulingConfig:
    """Immutable settings handed to the scheduling core."""

    day_start_minutes: int
    day_end_minutes: int
    default_duration_minutes: int
    max_alternatives: int
    default_title: str
    default_priority: str
    draft_description: str
    category_keywords: Tuple[Tuple[str, Tuple[str, ...]], ...]
    reminder_lead_minutes: int
    poll_interval_seconds: float
    category_colors: Mapping[str, str]
    priority_colors: Mapping[str, str]

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "SchedulingConfig":
        """Build from a nested config dict, filling gaps from the defaults."""
        merged = merge_config(get_default_config(), config or {})
        window = merged['day_window']
        intent = merged['intent']
        reminders = merged['reminders']
        colors = merged['colors']

        start_minutes = int(window['start_hour']) * 60
        end_minutes = int(window['end_hour']) * 60
        if not 0 <= start_minutes < end_minutes <= 24 * 60:
            raise ValueError(
                f"Invalid day window: {window['start_hour']}-{window['end_hour']}"
            )

        keywords = intent['category_keywords']
        known = {category.value for category in Category}
        unknown = [name for name in keywords if name not in known]
        if unknown:
            raise ValueError(f"Unknown categories in category_keywords: {unknown}")
        if intent['default_priority'] not in {priority.value for priority in Priority}:
            raise ValueError(f"Unknown default_priority: {intent['default_priority']!r}")

        return cls(
            day_start_minutes=start_minutes,
            day_end_minutes=end_minutes,
            default_duration_minutes=int(intent['default_duration_minutes']),
            max_alternatives=int(intent['max_alternatives']),
            default_title=intent['default_title'],
            default_priority=intent['default_priority'],
            draft_description=intent['draft_description'],
            category_keywords=tuple(
                (category, tuple(words))
                for category, words in keywords.items()
            ),
            reminder_lead_minutes=int(reminders['lead_minutes']),
            poll_interval_seconds=float(reminders['poll_interval_seconds']),
            category_colors=MappingProxyType(dict(colors['category'])),
            priority_colors=MappingProxyType(dict(colors['priority'])),
        )

    def color_for(self, category: str) -> str:
        """Display color of a category, falling back to the general color."""
        key = getattr(category, 'value', category)
        return self.category_colors.get(key, self.category_colors.get('general', '#94A3B8'))


DEFAULT_CONFIG = SchedulingConfig.from_dict({})
