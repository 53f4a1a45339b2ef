"""
Settings provider error classifications.

Only SettingNotFoundError is recoverable: it is turned into an absent value
when the initial snapshot is built. Everything else is fatal.
"""

from typing import Optional, Dict, Any


class AppearanceMonitorError(Exception):
    """Base class for every error raised by the appearance monitor."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ProviderError(AppearanceMonitorError):
    """Failure reported by, or while talking to, the settings provider."""

    def __init__(self, message: str, namespace: Optional[str] = None,
                 key: Optional[str] = None, error_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.namespace = namespace
        self.key = key
        self.error_name = error_name


class SettingNotFoundError(ProviderError):
    """The provider does not know or does not support the requested setting."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, **kwargs)
        self.recoverable = True


class PortalConnectionError(ProviderError):
    """The session bus could not be reached or went away."""


class PortalRequestError(ProviderError):
    """The portal answered a request with an error other than not-found."""
