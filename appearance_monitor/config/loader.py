"""Configuration loader: dataclass defaults overridden by an optional YAML file."""

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import DefaultConfig, LoggingParams, PortalParams, get_default_config
from .validation import ConfigValidator

CONFIG_PATH_ENV = "APPEARANCE_MONITOR_CONFIG"


def default_config_path() -> Path:
    """Resolve the config file location from the environment."""
    explicit = os.environ.get(CONFIG_PATH_ENV)
    if explicit:
        return Path(explicit)

    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "appearance-monitor" / "config.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 2-tier precedence."""

    config_path: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_path is None:
            config_path = default_config_path()

        return cls(
            config_path=Path(config_path),
            defaults=get_default_config(),
        )

    def load_overrides(self) -> dict[str, Any]:
        """Load the YAML override file; a missing file means no overrides."""
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path, encoding="utf-8") as f:
                overrides = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Cannot read configuration file: {e}",
                path=str(self.config_path)
            ) from e

        if overrides is None:
            return {}
        if not isinstance(overrides, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                path=str(self.config_path)
            )
        return overrides

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration.

        Priority order:
        1. Explicit overrides, or the YAML file when none are given
        2. Dataclass defaults (lowest priority)
        """
        config = asdict(self.defaults)
        if overrides is None:
            overrides = self.load_overrides()
        return self._deep_merge(config, overrides)

    def load(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge, validate and build the typed configuration."""
        merged = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            details = "; ".join(f"{err.field}: {err.message} (got: {err.value!r})" for err in errors)
            raise ConfigurationError(
                f"Invalid configuration: {details}",
                path=str(self.config_path),
                errors=errors
            )

        return DefaultConfig(
            logging=self._build(LoggingParams, merged["logging"]),
            portal=self._build(PortalParams, merged["portal"]),
        )

    def _build(self, cls: type, values: dict[str, Any]) -> Any:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown {cls.__name__} option(s): {', '.join(unknown)}",
                path=str(self.config_path)
            )
        return cls(**values)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
