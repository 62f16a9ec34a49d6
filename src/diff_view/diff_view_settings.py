"""Tunable settings for the diff view."""

from dataclasses import dataclass, fields
import json
import logging
from typing import Any, Dict


@dataclass
class DiffViewSettings:
    """
    Diff view configuration.

    Windowing values control how many lines are materialized for rendering and
    how lazily the window follows the cursor.
    """
    window_size: int = 1000
    buffer_threshold: int = 200
    buffer_size: int = 500
    line_scroll: int = 1
    half_page_scroll: int = 10
    key_sequence_timeout: float = 0.5  # Seconds allowed between the two keys of "gg"
    full_context_lines: int = 1_000_000

    # Smallest legal value for each setting
    _MINIMUMS = {
        "window_size": 1,
        "buffer_threshold": 0,
        "buffer_size": 1,
        "line_scroll": 1,
        "half_page_scroll": 1,
        "key_sequence_timeout": 0.0,
        "full_context_lines": 0,
    }

    @classmethod
    def create_default(cls) -> "DiffViewSettings":
        """Create a new DiffViewSettings object with default values."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiffViewSettings":
        """
        Build settings from a dictionary.

        Missing, mistyped or out-of-range values keep their defaults and unknown
        keys are ignored.

        Args:
            data: Dictionary of setting names to values

        Returns:
            DiffViewSettings object with the valid values applied
        """
        settings = cls.create_default()
        if not isinstance(data, dict):
            return settings

        for f in fields(cls):
            if f.name not in data:
                continue

            value = data[f.name]
            default = getattr(settings, f.name)

            # bool is an int subclass but never a valid setting value
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue

            if isinstance(default, int) and not isinstance(value, int):
                continue

            if value < cls._MINIMUMS[f.name]:
                continue

            setattr(settings, f.name, type(default)(value))

        return settings

    @classmethod
    def load(cls, path: str) -> "DiffViewSettings":
        """
        Load settings from a JSON file.

        Args:
            path: Path to the settings file

        Returns:
            DiffViewSettings object with loaded values

        Raises:
            json.JSONDecodeError: If file contains invalid JSON
            OSError: If the file cannot be read
        """
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def load_or_default(cls, path: str | None) -> "DiffViewSettings":
        """
        Load settings from a JSON file, falling back to defaults.

        Args:
            path: Path to the settings file, or None

        Returns:
            Loaded settings, or defaults if the file is missing or unreadable
        """
        if path is None:
            return cls.create_default()

        try:
            return cls.load(path)

        except FileNotFoundError:
            return cls.create_default()

        except (OSError, json.JSONDecodeError) as e:
            logging.getLogger("DiffViewSettings").warning("Failed to load settings from %s: %s", path, e)
            return cls.create_default()
