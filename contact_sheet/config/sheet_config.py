"""Unified configuration management for contact sheets."""

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, Optional, Union
from pathlib import Path
import json
import os
from dotenv import load_dotenv

from contact_sheet.config.config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_INTERVAL_FRAMES,
    DEFAULT_INTERVAL_SECONDS,
    DEFAULT_LOG_LEVEL,
    ENV_PREFIX,
)
from contact_sheet.exceptions import ConfigError
from contact_sheet.models import LayoutConfig, OutputConfig, SelectionConfig, VideoMetadata


@dataclass
class SelectionSettings:
    """Frame selection as stored in a config file.

    Bounds may be given as frames or seconds; unset bounds mean the start or
    end of the video. Frames win when both are given. The interval defaults
    to one thumbnail every 30 seconds; ``interval_seconds`` takes precedence
    over ``interval_value`` unless it is cleared to None.
    """
    start_frame: Optional[int] = None
    end_frame: Optional[int] = None
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    interval_value: float = DEFAULT_INTERVAL_FRAMES
    interval_seconds: Optional[float] = DEFAULT_INTERVAL_SECONDS
    frame_limit: Optional[int] = None

    def resolve(self, metadata: VideoMetadata) -> SelectionConfig:
        """Build a validated SelectionConfig for a concrete video."""
        selection = SelectionConfig.for_video(metadata)

        # End first so a start past the default end is not rejected early
        if self.end_frame is not None:
            selection = selection.with_end_frame(self.end_frame, metadata)
        elif self.end_time is not None:
            selection = selection.with_end_time(self.end_time, metadata)

        if self.start_frame is not None:
            selection = selection.with_start_frame(self.start_frame, metadata)
        elif self.start_time is not None:
            selection = selection.with_start_time(self.start_time, metadata)

        if self.interval_seconds is not None:
            selection = selection.with_interval_seconds(self.interval_seconds, metadata)
        else:
            selection = selection.with_interval(self.interval_value, metadata)

        return selection.with_frame_limit(self.frame_limit, metadata)


def _section(cls, data: Any, name: str):
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ConfigError(f"Section '{name}' must be an object")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown keys in section '{name}': {', '.join(sorted(unknown))}")
    return cls(**data)


@dataclass
class SheetConfig:
    """Main configuration container."""
    selection: SelectionSettings = field(default_factory=SelectionSettings)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Optional[str] = None

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> 'SheetConfig':
        """Load configuration from JSON file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict) -> 'SheetConfig':
        """Create configuration from dictionary."""
        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be an object")
        unknown = set(data) - {"selection", "layout", "output", "log_level", "log_dir"}
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(
            selection=_section(SelectionSettings, data.get('selection'), 'selection'),
            layout=_section(LayoutConfig, data.get('layout'), 'layout'),
            output=_section(OutputConfig, data.get('output'), 'output'),
            log_level=data.get('log_level', DEFAULT_LOG_LEVEL),
            log_dir=data.get('log_dir'),
        )

    @classmethod
    def from_env(cls) -> 'SheetConfig':
        """Load configuration from environment variables."""
        load_dotenv()

        config = cls()
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", DEFAULT_LOG_LEVEL)
        config.log_dir = os.getenv(f"{ENV_PREFIX}LOG_DIR")

        output_format = os.getenv(f"{ENV_PREFIX}FORMAT")
        quality = os.getenv(f"{ENV_PREFIX}QUALITY")
        columns = os.getenv(f"{ENV_PREFIX}COLUMNS")
        thumbnail_width = os.getenv(f"{ENV_PREFIX}THUMBNAIL_WIDTH")

        try:
            if output_format:
                config.output = replace(config.output, format=output_format.lower())
            if quality:
                config.output = replace(config.output, quality=int(quality))
            if columns:
                config.layout = replace(config.layout, columns=int(columns))
            if thumbnail_width:
                config.layout = replace(config.layout, thumbnail_width=int(thumbnail_width))
        except ValueError as exc:
            raise ConfigError(f"Invalid numeric environment value: {exc}") from exc

        return config

    def to_dict(self) -> Dict:
        """Convert configuration to dictionary."""
        return {
            'selection': asdict(self.selection),
            'layout': self.layout.to_dict(),
            'output': self.output.to_dict(),
            'log_level': self.log_level,
            'log_dir': self.log_dir,
        }

    def save_to_file(self, config_path: Union[str, Path]) -> None:
        """Save configuration to JSON file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def validated(self) -> 'SheetConfig':
        """Validate the video-independent parts (layout and output)."""
        self.layout.validated()
        self.output.validated()
        return self


# Global configuration instance
_config_instance: Optional[SheetConfig] = None


def get_config() -> SheetConfig:
    """Get or create the global configuration instance."""
    global _config_instance
    if _config_instance is None:
        _config_instance = SheetConfig.from_env()
    return _config_instance


def set_config(config: SheetConfig) -> None:
    """Set the global configuration instance."""
    global _config_instance
    _config_instance = config


def load_config(config_path: Optional[Union[str, Path]] = None) -> SheetConfig:
    """Load configuration from file or environment."""
    if config_path:
        config = SheetConfig.from_file(config_path)
    else:
        config = SheetConfig.from_env()

    set_config(config)
    return config


def create_default_config_file(config_path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> Path:
    """Create a default configuration file."""
    config = SheetConfig()
    config.save_to_file(config_path)
    return Path(config_path)
