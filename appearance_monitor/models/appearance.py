"""
Appearance data models.

A snapshot holds the three appearance preferences at one point of the
emitted sequence. Every field is optional: None means the desktop expresses
no preference (or does not support the setting), never a failed lookup.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Optional


class ColorScheme(str, Enum):
    """Preferred color scheme."""
    LIGHT = "light"
    DARK = "dark"


class Contrast(str, Enum):
    """Preferred contrast."""
    HIGH = "high"


@dataclass(frozen=True)
class Color:
    """sRGB color with channels in the 0..1 range."""
    red: float
    green: float
    blue: float

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0.0 <= channel <= 1.0:
                raise ValueError(f"Color channel out of range: {channel}")

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``#rrggbb`` (either case)."""
        digits = value[1:] if value.startswith("#") else value
        if len(digits) != 6:
            raise ValueError(f"Not a hex color: {value!r}")
        red, green, blue = (int(digits[i:i + 2], 16) / 255 for i in (0, 2, 4))
        return cls(red, green, blue)

    def to_hex(self) -> str:
        return "#" + "".join(
            f"{round(channel * 255):02x}" for channel in (self.red, self.green, self.blue)
        )

    def __str__(self) -> str:
        return self.to_hex()


@dataclass(frozen=True)
class AppearanceSnapshot:
    """One complete set of appearance preferences."""

    accent_color: Optional[Color] = None
    color_scheme: Optional[ColorScheme] = None
    contrast: Optional[Contrast] = None

    def with_update(self, field: str, value: Any) -> "AppearanceSnapshot":
        """Copy of this snapshot with exactly one field replaced."""
        if field not in SNAPSHOT_FIELDS:
            raise ValueError(f"Unknown snapshot field: {field!r}")
        return replace(self, **{field: value})

    def changed_fields(self, other: "AppearanceSnapshot") -> list[str]:
        """Names of the fields whose values differ between two snapshots."""
        return [name for name in SNAPSHOT_FIELDS if getattr(self, name) != getattr(other, name)]


SNAPSHOT_FIELDS = tuple(f.name for f in fields(AppearanceSnapshot))
