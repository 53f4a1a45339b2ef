"""Configuration validation utilities."""

import re
from dataclasses import dataclass
from typing import Any

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_BUS_NAME_RE = re.compile(r"^[A-Za-z_-][A-Za-z0-9_-]*(\.[A-Za-z_-][A-Za-z0-9_-]*)+$")
_OBJECT_PATH_RE = re.compile(r"^/$|^(/[A-Za-z0-9_]+)+$")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        for flag in ("format_json", "include_timestamp", "include_caller"):
            if flag in params and not isinstance(params[flag], bool):
                errors.append(ValidationError(
                    field=f"logging.{flag}",
                    message="Must be a boolean",
                    value=params[flag]
                ))

        return errors

    @staticmethod
    def validate_portal_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate settings portal endpoint parameters."""
        errors = []

        for name in ("bus_name", "interface", "namespace"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not _BUS_NAME_RE.match(value):
                    errors.append(ValidationError(
                        field=f"portal.{name}",
                        message="Must be a dot-separated D-Bus name",
                        value=value
                    ))

        if "object_path" in params:
            value = params["object_path"]
            if not isinstance(value, str) or not _OBJECT_PATH_RE.match(value):
                errors.append(ValidationError(
                    field="portal.object_path",
                    message="Must be a D-Bus object path",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        for section in config:
            if section not in ("logging", "portal"):
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=config[section]
                ))

        for section, validate in (
            ("logging", ConfigValidator.validate_logging_params),
            ("portal", ConfigValidator.validate_portal_params),
        ):
            params = config.get(section, {})
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue
            errors.extend(validate(params))

        return errors
