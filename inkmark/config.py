"""
User-adjustable settings for the annotation tools.
"""
import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from inkmark.utils import get_config_dir

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "settings.json"


@dataclass(frozen=True)
class ColorPreset:
    """A named highlight color offered by the color selector."""
    label: str
    value: str


def _default_presets() -> List[ColorPreset]:
    return [
        ColorPreset("Underline", "underline"),
        ColorPreset("Yellow", "yellow"),
        ColorPreset("Orange", "orange"),
        ColorPreset("Red", "red"),
        ColorPreset("Magenta", "magenta"),
        ColorPreset("Aqua", "aqua"),
        ColorPreset("Lime", "lime"),
    ]


@dataclass
class InkmarkSettings:
    """Settings with their built-in defaults."""
    preset_colors: List[ColorPreset] = field(default_factory=_default_presets)
    custom_color_label: str = "Custom"
    choose_color_label: str = "Custom Color…"
    default_bookmark_label: str = ""
    front_matter_label: str = "Front matter"
    outline_level: int = 1

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data['preset_colors'] = [{'label': p.label, 'value': p.value}
                                 for p in self.preset_colors]
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'InkmarkSettings':
        """Create settings from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(InkmarkSettings)}
        values = {key: value for key, value in data.items() if key in known}
        if 'preset_colors' in values:
            values['preset_colors'] = [ColorPreset(p['label'], p['value'])
                                       for p in values['preset_colors']]
        return InkmarkSettings(**values)


def get_settings_path() -> Path:
    return get_config_dir(create=False) / SETTINGS_FILE_NAME


def load_settings(path: Optional[Union[str, Path]] = None) -> InkmarkSettings:
    """
    Load settings from JSON.

    Args:
        path: Settings file; defaults to settings.json in the config directory

    Returns:
        Loaded settings, or defaults if the file is missing or unreadable
    """
    settings_path = Path(path) if path is not None else get_settings_path()
    if not settings_path.exists():
        return InkmarkSettings()

    try:
        with open(settings_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("settings must be a JSON object")
        return InkmarkSettings.from_dict(data)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.warning("Failed to load settings from %s: %s", settings_path, e)
        return InkmarkSettings()
