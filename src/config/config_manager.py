"""
Configuration Manager Module

Handles loading, saving, and managing the user's custom options.
Saved options override defaults field by field; invalid saved values are ignored.
"""

import json
from dataclasses import dataclass, field
from typing import Optional

from domain.exceptions import InvalidGoalError, StorageError
from domain.validation import validate_color, validate_goal
from infrastructure.logger import get_logger
from infrastructure.storage import OPTIONS_KEY, KeyValueStorage

logger = get_logger("ConfigManager")

# Default attendance goal percentage
DEFAULT_ATTENDANCE_GOAL = 55

# Colour presets: name -> (background, foreground, accent)
THEMES = {
    'default': {'background': '#fffbf7', 'foreground': '#45372b', 'accent': '#df7020'},
    'bsod': {'background': '#153489', 'foreground': '#eceae5', 'accent': '#5ea5ee'},
    'dracula': {'background': '#282a36', 'foreground': '#f8f8f2', 'accent': '#f44336'},
    'ultra-violet': {'background': '#440184', 'foreground': '#BF00FF', 'accent': '#E78FFF'},
    'hello-kitty': {'background': '#FFF0F5', 'foreground': '#4a4a4a', 'accent': '#ff1493'},
    'matrix': {'background': '#2b2b2b', 'foreground': '#4eee85', 'accent': '#4eee85'},
    'dark-mode': {'background': '#303030', 'foreground': '#e0e0e0', 'accent': '#9e9e9e'},
    'windows-98': {'background': '#c0c0c0', 'foreground': '#000000', 'accent': '#008080'},
    'mint': {'background': '#e5ffe5', 'foreground': '#2e8b57', 'accent': '#32cd3f'},
    'terminal': {'background': '#1a170f', 'foreground': '#eceae5', 'accent': '#eec35e'},
}

COLOR_FIELDS = ('background', 'foreground', 'accent')


@dataclass
class CustomOptions:
    """User options: theme colours and the monthly attendance goal."""
    background: str = "#fffbf7"
    foreground: str = "#45372b"
    accent: str = "#df7020"
    attendance_goal: int = DEFAULT_ATTENDANCE_GOAL
    theme_name: str = "default"


@dataclass
class AppConfig:
    """Main application configuration container."""
    options: CustomOptions = field(default_factory=CustomOptions)


class ConfigManager:
    """
    Manages the custom options with JSON persistence in key-value storage.

    Responsibilities:
    - Load options, falling back to defaults on missing or corrupt data
    - Save options
    - Validate and apply single option updates and theme presets
    """

    def __init__(self, storage: KeyValueStorage, key: str = OPTIONS_KEY):
        self.storage = storage
        self.key = key
        self._config: AppConfig = AppConfig()

    @property
    def config(self) -> AppConfig:
        """Get current configuration."""
        return self._config

    def load(self) -> AppConfig:
        """Load options from storage."""
        try:
            raw = self.storage.get_item(self.key)
        except StorageError as e:
            logger.error(f"Error reading options, using defaults: {e}")
            self._config = AppConfig()
            return self._config

        if not raw:
            self._config = AppConfig()
            return self._config

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing options, using defaults: {e}")
            self._config = AppConfig()
            return self._config

        if not isinstance(data, dict):
            logger.error("Saved options are not a JSON object, using defaults")
            data = {}

        self._config = self._dict_to_config(data)
        return self._config

    def save(self) -> None:
        """Save current options to storage."""
        data = self._config_to_dict(self._config)
        try:
            self.storage.set_item(self.key, json.dumps(data))
        except StorageError as e:
            logger.error(f"Error saving options: {e}")

    def update_option(self, name: str, value) -> None:
        """
        Validate and set a single option, then save.

        Raises:
            InvalidGoalError: If attendance_goal is outside 0-100
            ValueError: If the option is unknown or a colour is not a hex code
        """
        options = self._config.options
        if name == 'attendance_goal':
            if not validate_goal(value):
                raise InvalidGoalError(value)
            options.attendance_goal = value
        elif name in COLOR_FIELDS:
            if not validate_color(value):
                raise ValueError(f"Invalid colour for {name}: {value!r}")
            setattr(options, name, value)
        elif name == 'theme_name':
            options.theme_name = str(value)
        else:
            raise ValueError(f"Unknown option: {name}")
        self.save()

    def apply_theme(self, theme_name: str) -> CustomOptions:
        """Copy a preset's colours into the options and save."""
        if theme_name not in THEMES:
            raise ValueError(f"Unknown theme: {theme_name}")
        options = self._config.options
        for name, color in THEMES[theme_name].items():
            setattr(options, name, color)
        options.theme_name = theme_name
        self.save()
        logger.info(f"Applied theme {theme_name}")
        return options

    def _config_to_dict(self, config: AppConfig) -> dict:
        """Convert AppConfig to the stored JSON layout."""
        return {
            "background": config.options.background,
            "foreground": config.options.foreground,
            "accent": config.options.accent,
            "attendanceGoal": config.options.attendance_goal,
            "themeName": config.options.theme_name,
        }

    def _dict_to_config(self, data: dict) -> AppConfig:
        """Convert stored JSON to AppConfig, overriding defaults field by field."""
        defaults = CustomOptions()

        def color(name: str) -> str:
            value = data.get(name)
            if value is None:
                return getattr(defaults, name)
            if not validate_color(value):
                logger.warning(f"Ignoring invalid saved colour {name}={value!r}")
                return getattr(defaults, name)
            return value

        goal: Optional[int] = data.get("attendanceGoal")
        if goal is None:
            goal = defaults.attendance_goal
        elif not validate_goal(goal):
            logger.warning(f"Ignoring invalid saved attendance goal {goal!r}")
            goal = defaults.attendance_goal

        theme_name = data.get("themeName", defaults.theme_name)
        if not isinstance(theme_name, str):
            theme_name = defaults.theme_name

        return AppConfig(
            options=CustomOptions(
                background=color("background"),
                foreground=color("foreground"),
                accent=color("accent"),
                attendance_goal=goal,
                theme_name=theme_name,
            )
        )
