"""
Marker families and their base-image geometry.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class MarkerProfile:
    """Geometry of a base marker image (all values in base pixels)."""
    base_size: int
    border_thickness: int
    border_padding: int

    @property
    def pattern_start(self) -> int:
        """First row/column of the random interior."""
        return self.border_thickness + self.border_padding

    @property
    def pattern_end(self) -> int:
        """One past the last row/column of the random interior."""
        return self.base_size - self.pattern_start


class MarkerKind(Enum):
    """Available marker families."""
    VUFORIA = 1
    ARTOOLKIT = 2

    @property
    def profile(self) -> MarkerProfile:
        return PROFILES[self]

    @classmethod
    def parse(cls, value: Union[str, int, "MarkerKind"]) -> "MarkerKind":
        """Resolve a kind from an enum member, its name or its numeric value."""
        if isinstance(value, cls):
            return value

        if isinstance(value, int):
            return cls(value)

        text = str(value).strip()
        if text.isdigit():
            return cls(int(text))

        for kind in cls:
            if kind.name.lower() == text.lower():
                return kind

        raise ValueError(f"Unknown marker kind: {value!r}")


PROFILES = {
    MarkerKind.VUFORIA: MarkerProfile(base_size=64, border_thickness=4, border_padding=3),
    MarkerKind.ARTOOLKIT: MarkerProfile(base_size=32, border_thickness=8, border_padding=1),
}
