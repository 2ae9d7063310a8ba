"""
Track and Detection Containers

Immutable value types exchanged between the perception boundary, the
tracker core and its consumers.

Track Lifecycle:
    NEW (frames_detected=1) -> MATCHED / COASTING -> EVICTED

A track is never mutated in place; every tick produces replacement
instances via ``dataclasses.replace``.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Tuple, Union


class Side(Enum):
    """Coarse handedness label supplied by the perception boundary."""

    LEFT = "Left"
    RIGHT = "Right"

    @classmethod
    def parse(cls, value: Union["Side", str]) -> "Side":
        """
        Parse a handedness label.

        Args:
            value: Side instance or label string ("Left"/"Right", any case)

        Returns:
            Side member

        Raises:
            ValueError: If the label is not one of the two sides
        """
        if isinstance(value, cls):
            return value
        label = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == label:
                return member
        raise ValueError(f"Unknown side label: {value!r}")

    @property
    def opposite(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


@dataclass(frozen=True)
class Detection:
    """
    One tick's raw, identity-less hand observation.

    Attributes:
        x: Horizontal canvas coordinate
        y: Vertical canvas coordinate
        side: Handedness label
    """

    x: float
    y: float
    side: Side

    def __post_init__(self) -> None:
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(f"Detection coordinates must be finite, got ({self.x}, {self.y})")
        if not isinstance(self.side, Side):
            object.__setattr__(self, "side", Side.parse(self.side))

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Track:
    """
    Persistent, identified estimate of one hand.

    Attributes:
        id: Unique identifier, stable for the track's lifetime
        x, y: Smoothed position
        vx, vy: Instantaneous per-tick displacement (not averaged)
        side: Handedness label from the last matched detection
        alpha: Visibility in [0, 1]
        frames_missing: Consecutive unmatched ticks (0 while matched)
        frames_detected: Matched tick count, frozen while missing
    """

    id: Hashable
    x: float
    y: float
    side: Side
    vx: float = 0.0
    vy: float = 0.0
    alpha: float = 1.0
    frames_missing: int = 0
    frames_detected: int = 1

    @property
    def position(self) -> Tuple[float, float]:
        """Get current position (x, y)."""
        return (self.x, self.y)

    @property
    def velocity(self) -> Tuple[float, float]:
        """Get current per-tick velocity (vx, vy)."""
        return (self.vx, self.vy)

    @property
    def speed(self) -> float:
        """Get speed in canvas units per tick."""
        return math.hypot(self.vx, self.vy)

    @property
    def is_coasting(self) -> bool:
        """True while the track is being predicted without a detection."""
        return self.frames_missing > 0

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "vx": self.vx,
            "vy": self.vy,
            "side": self.side.value,
            "alpha": self.alpha,
            "frames_missing": self.frames_missing,
            "frames_detected": self.frames_detected,
        }
