"""
Data models module.

Immutable appearance values and the snapshot that carries them.
"""
from .appearance import SNAPSHOT_FIELDS, AppearanceSnapshot, Color, ColorScheme, Contrast

__all__ = ["SNAPSHOT_FIELDS", "AppearanceSnapshot", "Color", "ColorScheme", "Contrast"]
