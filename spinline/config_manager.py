"""Configuration management for spinline."""

import copy
import os
import yaml
from typing import Dict, Any, Optional
from pathlib import Path

from .errors import ConfigurationError
from .models.render_state import DEFAULT_FRAMES, DEFAULT_INTERVAL_MS, SpinnerStyle
from .utils.colors import COLORS, DEFAULT_COLOR, DEFAULT_SYMBOLS


class ConfigManager:
    """Manages spinner configuration loading, validation, and access."""

    DEFAULT_CONFIG_PATH = "config/spinline.yaml"
    DEFAULT_CONFIG_TEMPLATE = {
        "spinner": {
            "frames": list(DEFAULT_FRAMES),
            "interval_ms": DEFAULT_INTERVAL_MS
        },
        "color": DEFAULT_COLOR,
        "symbols": dict(DEFAULT_SYMBOLS)
    }

    ENV_OVERRIDES = {
        "SPINLINE_COLOR": "color",
        "SPINLINE_INTERVAL_MS": "spinner.interval_ms",
    }

    def __init__(self, config_path: Optional[str] = None):
        """Initialize ConfigManager with optional custom config path.

        Without an explicit path the default file is used when it exists,
        otherwise the built-in defaults apply.
        """
        self.explicit_path = config_path is not None
        self.config_path = Path(config_path or self.DEFAULT_CONFIG_PATH)
        self.config_data: Dict[str, Any] = copy.deepcopy(self.DEFAULT_CONFIG_TEMPLATE)

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from file and environment variables."""
        self.config_data = copy.deepcopy(self.DEFAULT_CONFIG_TEMPLATE)

        if self.config_path.exists():
            self._merge(self.config_data, self._read_file())
        elif self.explicit_path:
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")

        # Override with environment variables if they exist
        self._load_env_overrides()

        # Validate configuration
        self._validate_config()

        return self.config_data

    def _read_file(self) -> Dict[str, Any]:
        try:
            with open(self.config_path, 'r', encoding='utf-8') as file:
                data = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error reading config file: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a mapping at the top level")
        return data

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]):
        """Merge override into base, recursing into nested mappings."""
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value

    def _load_env_overrides(self):
        """Load configuration overrides from environment variables."""
        for env_var, config_path in self.ENV_OVERRIDES.items():
            value = os.getenv(env_var)
            if not value:
                continue
            if config_path == "spinner.interval_ms":
                try:
                    value = int(value)
                except ValueError:
                    raise ConfigurationError(f"{env_var} must be an integer, got {value!r}")
            self._set_nested_value(self.config_data, config_path, value)

    def _set_nested_value(self, data: Dict[str, Any], path: str, value: Any):
        """Set a nested dictionary value using dot notation."""
        keys = path.split('.')
        current = data

        for key in keys[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def _validate_config(self):
        """Validate spinner style, color and symbols."""
        spinner = self.config_data.get("spinner")
        if not isinstance(spinner, dict):
            raise ConfigurationError("'spinner' must be a mapping with frames and interval_ms")

        # SpinnerStyle raises ConfigurationError on empty frames or a bad interval
        SpinnerStyle.from_value(spinner)

        color = self.config_data.get("color")
        if color not in COLORS:
            raise ConfigurationError(f"Color must be one of: {', '.join(COLORS)}")

        symbols = self.config_data.get("symbols") or {}
        if not isinstance(symbols, dict):
            raise ConfigurationError("'symbols' must be a mapping")
        unknown = set(symbols) - set(DEFAULT_SYMBOLS)
        if unknown:
            raise ConfigurationError(f"Unknown symbol names: {', '.join(sorted(unknown))}")
        if not all(isinstance(value, str) for value in symbols.values()):
            raise ConfigurationError("Symbols must be strings")

    def _get_nested_value(self, data: Dict[str, Any], path: str) -> Any:
        """Get a nested dictionary value using dot notation."""
        keys = path.split('.')
        current = data

        try:
            for key in keys:
                current = current[key]
            return current
        except (KeyError, TypeError):
            return None

    def get(self, path: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation."""
        value = self._get_nested_value(self.config_data, path)
        return value if value is not None else default

    def create_default_config(self, force: bool = False):
        """Create a default configuration file."""
        if self.config_path.exists() and not force:
            raise ConfigurationError(f"Configuration file already exists: {self.config_path}")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self.config_path, 'w', encoding='utf-8') as file:
                yaml.safe_dump(self.DEFAULT_CONFIG_TEMPLATE, file, default_flow_style=False,
                               indent=2, allow_unicode=True)
        except OSError as e:
            raise ConfigurationError(f"Error creating default config file: {e}")

    def is_configured(self) -> bool:
        """Check if the configuration loads and validates."""
        try:
            self.load_config()
            return True
        except ConfigurationError:
            return False

    @property
    def frames(self) -> list:
        """Get animation frames."""
        return list(self.get("spinner.frames", DEFAULT_FRAMES))

    @property
    def interval_ms(self) -> int:
        """Get delay between frames in milliseconds."""
        return self.get("spinner.interval_ms", DEFAULT_INTERVAL_MS)

    @property
    def spinner_style(self) -> SpinnerStyle:
        """Get the configured animation as a SpinnerStyle."""
        return SpinnerStyle(frames=tuple(self.frames), interval_ms=self.interval_ms)

    @property
    def color(self) -> str:
        """Get spinner glyph color."""
        return self.get("color", DEFAULT_COLOR)

    @property
    def symbols(self) -> Dict[str, str]:
        """Get status symbols, filled in with defaults."""
        symbols = dict(DEFAULT_SYMBOLS)
        symbols.update(self.get("symbols", {}))
        return symbols

    def spinner_options(self) -> Dict[str, Any]:
        """Keyword arguments for constructing a Spinner from this configuration."""
        return {
            "spinner": self.spinner_style,
            "color": self.color,
            "symbols": self.symbols,
        }
