"""
Application settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class Theme(Enum):
    """UI theme options."""
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def from_string(cls, value: str) -> 'Theme':
        """Create from string value."""
        try:
            # Try to match by value
            for theme in cls:
                if theme.value == value.lower():
                    return theme
            # Try to match by name
            return cls[value.upper()]
        except (KeyError, AttributeError):
            return cls.DARK


@dataclass
class UISettings:
    """User interface settings."""
    theme: Theme = Theme.DARK
    window_width: int = 1000
    window_height: int = 700
    window_maximized: bool = False
    splitter_state: str = ""


@dataclass
class ApplicationSettings:
    """Main application settings container."""
    ui: UISettings = field(default_factory=UISettings)
    last_directory: str = ""


class SettingsManager:
    """Manager for loading/saving application settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = settings_path or self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            # Windows
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'DirDiff' / 'settings.json'
        else:
            # Linux/Mac
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'dirdiff' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Load settings from disk."""
        if not self.settings_path.exists():
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return self._from_dict(data)
        except (OSError, ValueError, AttributeError) as e:
            logging.warning(f"SettingsManager - Could not load {self.settings_path}, using defaults: {e}")
            return ApplicationSettings()

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(self._to_dict(settings), f, indent=2)

            self._settings = settings
            return True

        except OSError as e:
            logging.error(f"SettingsManager - Could not save {self.settings_path}: {e}")
            return False

    def reset(self) -> ApplicationSettings:
        """Reset to default settings."""
        self._settings = ApplicationSettings()
        self.save()
        return self._settings

    def remember_directory(self, path: Path | str) -> None:
        """Store the directory a dialog should start in next time."""
        path = Path(path)
        directory = path if path.is_dir() else path.parent
        self.settings.last_directory = str(directory)
        self.save()

    def _to_dict(self, settings: ApplicationSettings) -> dict:
        """Convert settings to dictionary for JSON serialization."""
        def convert(obj: Any) -> Any:
            if isinstance(obj, Enum):
                return obj.name
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            else:
                return obj

        return convert(asdict(settings))

    def _from_dict(self, data: dict) -> ApplicationSettings:
        """Convert dictionary back to settings objects."""
        def get_enum(enum_class: type, value: Any) -> Enum:
            if isinstance(value, str):
                try:
                    return enum_class[value]
                except KeyError:
                    return enum_class.from_string(value)
            return value

        ui_data = data.get('ui', {})
        defaults = UISettings()
        ui = UISettings(
            theme=get_enum(Theme, ui_data.get('theme', defaults.theme.name)),
            window_width=ui_data.get('window_width', defaults.window_width),
            window_height=ui_data.get('window_height', defaults.window_height),
            window_maximized=ui_data.get('window_maximized', defaults.window_maximized),
            splitter_state=ui_data.get('splitter_state', defaults.splitter_state),
        )

        return ApplicationSettings(
            ui=ui,
            last_directory=data.get('last_directory', ''),
        )
