"""
Adaptive Position Smoother

Blends a matched detection into its track with a motion-dependent factor:

    a = min_smoothing + clamp(move, 0, D) / D * (max_smoothing - min_smoothing)
    position' = position + (detection - position) * a
    velocity' = position' - position

``move`` is the distance from the detection to the track's pre-update
position. A nearly still hand gets a small factor (strong smoothing, low
jitter); a fast hand gets a large one (weak smoothing, low latency). Same
idea as the One-Euro filter, driven by displacement instead of a filtered
derivative.

Velocity is the raw instantaneous displacement and is not averaged.

Reference:
    - Casiez, G. et al. "1 Euro Filter", CHI 2012
"""

import math
from dataclasses import replace

from .config import DEFAULT_CONFIG, TrackerConfig
from .track import Detection, Track


def adaptive_alpha(move_dist: float, config: TrackerConfig = DEFAULT_CONFIG) -> float:
    """
    Smoothing factor for a given detection displacement.

    Args:
        move_dist: Distance between detection and current position
        config: Tracker configuration

    Returns:
        Blend factor in [min_smoothing, max_smoothing]
    """
    span = config.smoothing_distance
    ratio = min(max(move_dist, 0.0), span) / span
    return config.min_smoothing + ratio * (config.max_smoothing - config.min_smoothing)


def smooth(track: Track, detection: Detection, config: TrackerConfig = DEFAULT_CONFIG) -> Track:
    """
    Pull a matched track toward its detection.

    Updates position, velocity and side only; the lifecycle counters are
    left to the lifecycle manager.

    Args:
        track: Track before this tick's update
        detection: Detection matched to the track
        config: Tracker configuration

    Returns:
        Track with smoothed position, instantaneous velocity and new side
    """
    move_dist = math.sqrt((detection.x - track.x) ** 2 + (detection.y - track.y) ** 2)
    a = adaptive_alpha(move_dist, config)

    new_x = track.x + (detection.x - track.x) * a
    new_y = track.y + (detection.y - track.y) * a

    return replace(
        track,
        x=new_x,
        y=new_y,
        vx=new_x - track.x,
        vy=new_y - track.y,
        side=detection.side,
    )
