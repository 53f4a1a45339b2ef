"""
System failure error classifications for the output and startup paths.

These errors end the run; the entry point reports them and exits non-zero.
"""

from typing import Optional, Any

from .provider import AppearanceMonitorError


class SerializationError(AppearanceMonitorError):
    """A snapshot could not be encoded for output."""

    def __init__(self, message: str, snapshot: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.snapshot = snapshot


class DeliveryError(AppearanceMonitorError):
    """An encoded snapshot could not be written out."""

    def __init__(self, message: str, delivery_method: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.delivery_method = delivery_method


class ConfigurationError(AppearanceMonitorError):
    """The configuration file is unreadable or holds invalid values."""

    def __init__(self, message: str, path: Optional[str] = None,
                 errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.path = path
        self.errors = errors or []
