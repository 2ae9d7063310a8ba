"""
Hit Testing

Read-only consumer of tracker output for gameplay collision.

Only stable tracks (frames_detected >= stability_threshold) take part, so a
spurious detection that lives for a tick or two cannot trigger effects. A
target of radius R is hit when a stable track lies strictly inside
R + capture_margin of its centre.
"""

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from handtrack.tracking.config import DEFAULT_CONFIG, TrackerConfig
from handtrack.tracking.track import Track


def is_stable(track: Track, config: TrackerConfig = DEFAULT_CONFIG) -> bool:
    """True once a track has been matched often enough to interact."""
    return track.frames_detected >= config.stability_threshold


def capture_radius(target_radius: float, config: TrackerConfig = DEFAULT_CONFIG) -> float:
    return target_radius + config.capture_margin


def find_hit(
    tracks: Iterable[Track],
    target_xy: Tuple[float, float],
    target_radius: float,
    config: TrackerConfig = DEFAULT_CONFIG,
) -> Optional[Track]:
    """
    First stable track inside a target's capture radius.

    Args:
        tracks: Tracks in store order
        target_xy: Target centre (x, y)
        target_radius: Target radius R
        config: Tracker configuration

    Returns:
        The hitting track, or None
    """
    reach = capture_radius(target_radius, config)
    tx, ty = target_xy
    for track in tracks:
        if not is_stable(track, config):
            continue
        if math.sqrt((track.x - tx) ** 2 + (track.y - ty) ** 2) < reach:
            return track
    return None


def find_hits(
    tracks: Sequence[Track],
    targets: Iterable[Tuple[Tuple[float, float], float]],
    config: TrackerConfig = DEFAULT_CONFIG,
) -> List[Optional[Track]]:
    """Hit test several (centre, radius) targets against the same tracks."""
    return [find_hit(tracks, centre, radius, config) for centre, radius in targets]
