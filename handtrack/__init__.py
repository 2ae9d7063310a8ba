"""
HandTrack Source Package

Real-time multi-hand tracking and stabilization with:
- Gated, side-aware detection-to-track association
- Distance-adaptive smoothing (low jitter at rest, low lag in motion)
- Occlusion tolerance with inertial coasting and grace-period fade-out
- Perception boundary helpers, hit testing and render styling
- Synthetic replay, Monte Carlo tuning and HDF5 session recording
"""

from handtrack.interaction import RenderStyle, find_hit, is_stable, render_style
from handtrack.perception import FrameGate, landmarks_to_detections
from handtrack.tracking import (
    DEFAULT_CONFIG,
    EMPTY_STORE,
    AssociationMethod,
    Detection,
    HandTracker,
    Side,
    Track,
    TrackerConfig,
    TrackStore,
    tick,
)

__version__ = "1.0.0"
__author__ = "HandTrack Contributors"

__all__ = [
    # Core
    "Detection",
    "Side",
    "Track",
    "TrackStore",
    "EMPTY_STORE",
    "tick",
    "HandTracker",
    # Configuration
    "TrackerConfig",
    "AssociationMethod",
    "DEFAULT_CONFIG",
    # Boundaries
    "FrameGate",
    "landmarks_to_detections",
    "RenderStyle",
    "render_style",
    "find_hit",
    "is_stable",
]
