"""
Settings provider adapters.

``base`` holds the transport-independent contract; ``dbus`` maps it onto
the XDG desktop portal and is imported explicitly by the entry point.
"""
from .base import SettingSource, SettingsProvider, Subscription

__all__ = ["SettingSource", "SettingsProvider", "Subscription"]
