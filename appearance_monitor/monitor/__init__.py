"""
Appearance monitoring core.

Initial snapshot construction, the change-notification merge and the
monitor that composes them.
"""
from .appearance import AppearanceMonitor
from .builder import build_initial
from .multiplexer import merge_updates
from .normalizer import not_found_as_none

__all__ = ["AppearanceMonitor", "build_initial", "merge_updates", "not_found_as_none"]
