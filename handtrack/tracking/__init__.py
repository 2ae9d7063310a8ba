"""
Tracking Module

Multi-hand tracking and stabilization core.

Components:
    - predict_position: Damped constant-velocity prediction
    - associate: Gated, side-weighted detection-to-track assignment
    - smooth: Distance-adaptive position smoothing
    - coast / mark_matched / spawn: Track lifecycle transitions
    - TrackStore / tick: Immutable per-tick transform
    - HandTracker: Stateful facade for render loops

Example:
    >>> from handtrack.tracking import Detection, HandTracker, Side
    >>> tracker = HandTracker()
    >>> tracks = tracker.update([Detection(100, 100, Side.LEFT)])
"""

from .associator import Association, associate, weighted_distance_matrix
from .config import DEFAULT_CONFIG, AssociationMethod, TrackerConfig
from .lifecycle import TrackStatus, coast, mark_matched, spawn, track_status
from .predictor import predict_position, predict_positions
from .smoother import adaptive_alpha, smooth
from .store import EMPTY_STORE, TrackStore, tick
from .track import Detection, Side, Track
from .tracker import HandTracker

__all__ = [
    "Association",
    "AssociationMethod",
    "DEFAULT_CONFIG",
    "Detection",
    "EMPTY_STORE",
    "HandTracker",
    "Side",
    "Track",
    "TrackerConfig",
    "TrackStatus",
    "TrackStore",
    "adaptive_alpha",
    "associate",
    "coast",
    "mark_matched",
    "predict_position",
    "predict_positions",
    "smooth",
    "spawn",
    "tick",
    "track_status",
    "weighted_distance_matrix",
]
