"""
Tracker Configuration

Tunable constants for the hand tracker. All dynamics are expressed per tick
(one tick per rendered frame), never per second, so the tracker tolerates
variable frame spacing.

Defaults:
    persistence_frames  = 20    Consecutive misses a track survives
    max_match_dist      = 350   Association gate (canvas units)
    grace_period        = 5     Misses before visibility starts to fade
    min_smoothing       = 0.15  Blend factor for a still hand (strong smoothing)
    max_smoothing       = 0.8   Blend factor for a fast hand (low latency)
    smoothing_distance  = 150   Motion at which max_smoothing is reached
    stability_threshold = 3     Matched ticks before a track may interact
    prediction_damping  = 0.8   Velocity scale used to predict for association
    missing_damping     = 0.9   Velocity decay while coasting
    alpha_decay         = 0.1   Visibility lost per tick after the grace period
    same_side_weight    = 0.6   Distance scale for same-handedness candidates
    capture_margin      = 60    Added to a target radius for hit tests
"""

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict


class AssociationMethod(Enum):
    """Detection-to-track assignment strategy."""

    GREEDY = "greedy"  # Oldest track picks first
    OPTIMAL = "optimal"  # Minimum total cost bipartite matching


@dataclass(frozen=True)
class TrackerConfig:
    """
    Hand tracker parameters.

    Attributes:
        persistence_frames: Track is evicted on the miss after this many misses
        max_match_dist: Weighted distance must be strictly below this to match
        grace_period: Misses during which alpha stays untouched
        min_smoothing: Adaptive smoothing factor at zero motion
        max_smoothing: Adaptive smoothing factor at saturation motion
        smoothing_distance: Motion distance at which smoothing saturates
        stability_threshold: frames_detected needed before hit-testing
        prediction_damping: Velocity multiplier for the association prediction
        missing_damping: Velocity multiplier applied each coasting tick
        alpha_decay: Visibility decrement per tick beyond the grace period
        same_side_weight: Distance multiplier when handedness labels agree
        capture_margin: Extra radius added to targets for hit-testing
        association: Assignment strategy
    """

    persistence_frames: int = 20
    max_match_dist: float = 350.0
    grace_period: int = 5
    min_smoothing: float = 0.15
    max_smoothing: float = 0.8
    smoothing_distance: float = 150.0
    stability_threshold: int = 3
    prediction_damping: float = 0.8
    missing_damping: float = 0.9
    alpha_decay: float = 0.1
    same_side_weight: float = 0.6
    capture_margin: float = 60.0
    association: AssociationMethod = AssociationMethod.GREEDY

    def __post_init__(self) -> None:
        if self.persistence_frames < 0:
            raise ValueError(f"persistence_frames must be >= 0, got {self.persistence_frames}")
        if self.grace_period < 0:
            raise ValueError(f"grace_period must be >= 0, got {self.grace_period}")
        if self.stability_threshold < 1:
            raise ValueError(
                f"stability_threshold must be >= 1, got {self.stability_threshold}"
            )
        if self.max_match_dist <= 0:
            raise ValueError(f"max_match_dist must be > 0, got {self.max_match_dist}")
        if self.smoothing_distance <= 0:
            raise ValueError(f"smoothing_distance must be > 0, got {self.smoothing_distance}")
        if not 0.0 <= self.min_smoothing <= self.max_smoothing <= 1.0:
            raise ValueError(
                "smoothing factors must satisfy 0 <= min_smoothing <= max_smoothing <= 1, "
                f"got {self.min_smoothing} / {self.max_smoothing}"
            )
        for name in ("prediction_damping", "missing_damping", "alpha_decay", "same_side_weight"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if self.capture_margin < 0:
            raise ValueError(f"capture_margin must be >= 0, got {self.capture_margin}")
        if not isinstance(self.association, AssociationMethod):
            raise ValueError(f"association must be an AssociationMethod, got {self.association!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackerConfig":
        """
        Build a configuration from a plain mapping (e.g. a YAML block).

        Unknown keys are rejected so typos in scenario files surface early.

        Args:
            data: Mapping of field name to value

        Returns:
            TrackerConfig instance

        Raises:
            ValueError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown tracker settings: {', '.join(sorted(unknown))}")

        kwargs = dict(data)
        if "association" in kwargs and not isinstance(kwargs["association"], AssociationMethod):
            try:
                kwargs["association"] = AssociationMethod(str(kwargs["association"]).lower())
            except ValueError:
                raise ValueError(f"Unknown association method: {kwargs['association']!r}") from None
        for name in ("persistence_frames", "grace_period", "stability_threshold"):
            if name in kwargs:
                kwargs[name] = int(kwargs[name])
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a YAML/JSON friendly dictionary."""
        data = asdict(self)
        data["association"] = self.association.value
        return data


DEFAULT_CONFIG = TrackerConfig()
