"""Default configuration parameters for the appearance monitor."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoggingParams:
    """Diagnostic logging parameters. Logs always go to stderr."""
    level: str = "WARNING"
    format_json: bool = False
    include_timestamp: bool = True
    include_caller: bool = False


@dataclass(frozen=True)
class PortalParams:
    """Settings portal endpoint on the session bus."""
    bus_name: str = "org.freedesktop.portal.Desktop"
    object_path: str = "/org/freedesktop/portal/desktop"
    interface: str = "org.freedesktop.portal.Settings"
    namespace: str = "org.freedesktop.appearance"


@dataclass(frozen=True)
class DefaultConfig:
    """Complete configuration."""
    logging: LoggingParams
    portal: PortalParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        logging=LoggingParams(),
        portal=PortalParams(),
    )
