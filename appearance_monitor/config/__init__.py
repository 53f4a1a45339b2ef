"""
Configuration module.

Frozen dataclass defaults, an optional YAML override file and validation
of the merged result.
"""
from .defaults import DefaultConfig, LoggingParams, PortalParams, get_default_config
from .loader import ConfigLoader

__all__ = ["ConfigLoader", "DefaultConfig", "LoggingParams", "PortalParams", "get_default_config"]
