"""Configuration management for song-presenter.

Handles loading, saving, and validating TOML configuration stored in:
- macOS: ~/.config/song-presenter/config.toml
- Linux: ~/.config/song-presenter/config.toml (XDG_CONFIG_HOME)
- Windows: %APPDATA%\\song-presenter\\config.toml
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import tomllib
import tomli_w

PLACEHOLDER_TEXT = "Song lyrics not available. Please re-import this song."


@dataclass
class DeckSettings:
    """Settings that shape how decks are composed.

    Attributes:
        max_lines_per_slide: Line threshold for single-slide songs and the
            chunk size for songs without verse breaks
        max_translation_lines: Maximum translation lines shown on a slide
        prepend_title: Show the song name above the first slide's lyrics
            when the lyrics do not already start with it
        skip_static_slides: Leave out template intro/outro slides when
            previewing a single song
        placeholder_text: Content of the slide shown when lyrics are missing
    """

    max_lines_per_slide: int = 10
    max_translation_lines: int = 4
    prepend_title: bool = False
    skip_static_slides: bool = False
    placeholder_text: str = PLACEHOLDER_TEXT


@dataclass
class LogSettings:
    """Settings for the session log file.

    Attributes:
        log_dir: Directory that holds song_presenter.log
        level: Logging level name
    """

    log_dir: Path = field(default_factory=lambda: get_config_dir() / "logs")
    level: str = "INFO"


@dataclass
class PresenterConfig:
    """Configuration for song-presenter.

    Attributes:
        deck: Deck composition settings
        log: Logging settings
    """

    deck: DeckSettings = field(default_factory=DeckSettings)
    log: LogSettings = field(default_factory=LogSettings)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "PresenterConfig":
        """Load configuration from TOML file.

        Args:
            path: Path to config file (defaults to standard location)

        Returns:
            PresenterConfig instance with loaded values

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If a value has the wrong type
        """
        if path is None:
            path = get_config_path()

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        config = cls()

        if "deck" in data:
            deck = data["deck"]
            config.deck.max_lines_per_slide = _positive_int(
                deck.get("max_lines_per_slide", config.deck.max_lines_per_slide),
                "deck.max_lines_per_slide",
            )
            config.deck.max_translation_lines = _positive_int(
                deck.get("max_translation_lines", config.deck.max_translation_lines),
                "deck.max_translation_lines",
            )
            config.deck.prepend_title = _bool(
                deck.get("prepend_title", config.deck.prepend_title), "deck.prepend_title"
            )
            config.deck.skip_static_slides = _bool(
                deck.get("skip_static_slides", config.deck.skip_static_slides),
                "deck.skip_static_slides",
            )
            config.deck.placeholder_text = deck.get("placeholder_text", config.deck.placeholder_text)

        if "log" in data:
            log = data["log"]
            if "log_dir" in log:
                config.log.log_dir = Path(log["log_dir"]).expanduser()
            config.log.level = str(log.get("level", config.log.level)).upper()

        # Environment variables take precedence
        env_log_dir = os.environ.get("SONG_PRESENTER_LOG_DIR")
        if env_log_dir:
            config.log.log_dir = Path(env_log_dir).expanduser()

        env_level = os.environ.get("SONG_PRESENTER_LOG_LEVEL")
        if env_level:
            config.log.level = env_level.upper()

        return config

    def save(self, path: Optional[Path] = None) -> None:
        """Save configuration to TOML file.

        Args:
            path: Path to save config (defaults to standard location)
        """
        if path is None:
            path = get_config_path()

        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "deck": {
                "max_lines_per_slide": self.deck.max_lines_per_slide,
                "max_translation_lines": self.deck.max_translation_lines,
                "prepend_title": self.deck.prepend_title,
                "skip_static_slides": self.deck.skip_static_slides,
                "placeholder_text": self.deck.placeholder_text,
            },
            "log": {
                "log_dir": str(self.log.log_dir),
                "level": self.log.level,
            },
        }

        with open(path, "wb") as f:
            tomli_w.dump(data, f)

    def get(self, key: str, default: Optional[str] = None):
        """Get a configuration value by key.

        Supports dot notation for nested values (e.g., "deck.prepend_title").

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self
        for part in key.split("."):
            if hasattr(value, part):
                value = getattr(value, part)
            else:
                return default

        if isinstance(value, Path):
            return str(value)
        return value

    def set(self, key: str, value: str) -> None:
        """Set a configuration value by key.

        Supports dot notation for nested values (e.g., "deck.prepend_title").

        Args:
            key: Configuration key
            value: Configuration value

        Raises:
            ValueError: If the key is unknown or the value doesn't convert
        """
        parts = key.split(".")
        if len(parts) != 2:
            raise ValueError(f"Invalid config key: {key}")

        section = getattr(self, parts[0], None)
        if not isinstance(section, (DeckSettings, LogSettings)) or not hasattr(section, parts[1]):
            raise ValueError(f"Invalid config key: {key}")

        # Try to preserve type
        current = getattr(section, parts[1])
        if isinstance(current, bool):
            new_value = value.lower() in ("true", "1", "yes")
        elif isinstance(current, int):
            new_value = _positive_int(value, key)
        elif isinstance(current, Path):
            new_value = Path(value)
        else:
            new_value = value

        setattr(section, parts[1], new_value)


def _positive_int(value, key: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    if number < 1:
        raise ValueError(f"{key} must be at least 1, got {number}")
    return number


def _bool(value, key: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


def get_config_dir() -> Path:
    """Get the platform-specific config directory.

    Returns:
        Path to the config directory for song-presenter.
    """
    if sys.platform == "darwin" or sys.platform == "linux":
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            return Path(xdg_config) / "song-presenter"
        return Path.home() / ".config" / "song-presenter"
    elif sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "song-presenter"
        return Path.home() / "AppData" / "Roaming" / "song-presenter"
    else:
        return Path.home() / ".config" / "song-presenter"


def get_config_path() -> Path:
    """Get the path to the config.toml file.

    Returns:
        Path to config.toml
    """
    return get_config_dir() / "config.toml"


def ensure_config_exists(path: Optional[Path] = None) -> PresenterConfig:
    """Ensure config file exists, creating default if needed.

    Args:
        path: Path to config file (defaults to standard location)

    Returns:
        PresenterConfig instance
    """
    config_path = path or get_config_path()

    if config_path.exists():
        try:
            return PresenterConfig.load(config_path)
        except (tomllib.TOMLDecodeError, ValueError):
            # If config is corrupted, create a new one
            pass

    config = PresenterConfig()
    config.save(config_path)
    return config
