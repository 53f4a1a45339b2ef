"""
Error classification for the appearance monitor.

Provider failures are split into the single recoverable case (a setting the
portal does not know about) and fatal transport failures. Output failures
and configuration failures sit beside them under the same base class.
"""

from .provider import (
    AppearanceMonitorError,
    ProviderError,
    SettingNotFoundError,
    PortalConnectionError,
    PortalRequestError,
)
from .system_failures import (
    SerializationError,
    DeliveryError,
    ConfigurationError,
)

__all__ = [
    # Base
    "AppearanceMonitorError",
    # Provider Errors
    "ProviderError",
    "SettingNotFoundError",
    "PortalConnectionError",
    "PortalRequestError",
    # System Failures
    "SerializationError",
    "DeliveryError",
    "ConfigurationError",
]
