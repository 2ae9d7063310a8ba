"""
Track Lifecycle Manager

Per-tick state transitions for tracks.

Track Lifecycle:
    TENTATIVE -> CONFIRMED -> COASTING -> (CONFIRMED | EVICTED)

Transitions:
    Matched             frames_missing = 0, alpha = 1.0, frames_detected += 1
    Missed, streak < P  velocity *= missing_damping, position += velocity,
                        frames_missing += 1; after the grace period alpha
                        drops by alpha_decay (floored at 0)
    Missed, streak >= P evicted, never re-identified
    Unused detection    new track (frames_detected = 1)

frames_detected is frozen while coasting so a short occlusion does not
erase accumulated trust.
"""

from dataclasses import replace
from enum import Enum
from typing import Hashable, Optional

from .config import DEFAULT_CONFIG, TrackerConfig
from .track import Detection, Track


class TrackStatus(Enum):
    """Track lifecycle states as seen by consumers."""

    TENTATIVE = "tentative"  # Not yet trusted for interaction
    CONFIRMED = "confirmed"  # Matched and stable
    COASTING = "coasting"  # No detection, predicting only


def track_status(track: Track, config: TrackerConfig = DEFAULT_CONFIG) -> TrackStatus:
    """Classify a live track."""
    if track.frames_missing > 0:
        return TrackStatus.COASTING
    if track.frames_detected < config.stability_threshold:
        return TrackStatus.TENTATIVE
    return TrackStatus.CONFIRMED


def spawn(detection: Detection, track_id: Hashable) -> Track:
    """Create a new track from an unused detection."""
    return Track(
        id=track_id,
        x=detection.x,
        y=detection.y,
        side=detection.side,
        vx=0.0,
        vy=0.0,
        alpha=1.0,
        frames_missing=0,
        frames_detected=1,
    )


def mark_matched(track: Track) -> Track:
    """
    Apply the matched transition.

    Position, velocity and side must already carry the smoothed update.
    """
    return replace(
        track,
        frames_missing=0,
        alpha=1.0,
        frames_detected=track.frames_detected + 1,
    )


def coast(track: Track, config: TrackerConfig = DEFAULT_CONFIG) -> Optional[Track]:
    """
    Apply the missed transition.

    Args:
        track: Track that found no detection this tick
        config: Tracker configuration

    Returns:
        Coasted track, or None if the track is evicted
    """
    if track.frames_missing >= config.persistence_frames:
        return None

    vx = track.vx * config.missing_damping
    vy = track.vy * config.missing_damping
    frames_missing = track.frames_missing + 1

    alpha = track.alpha
    if frames_missing > config.grace_period:
        alpha = max(0.0, alpha - config.alpha_decay)

    return replace(
        track,
        x=track.x + vx,
        y=track.y + vy,
        vx=vx,
        vy=vy,
        frames_missing=frames_missing,
        alpha=alpha,
    )
