"""
Track Predictor

Projects a track one tick ahead with a damped constant-velocity model:

    predicted = position + velocity * damping

The prediction only steers association; it is never written back to the
track. Damping below 1 keeps a noisy instantaneous velocity from
overshooting the next detection.
"""

from typing import Iterable, List, Tuple

import numpy as np

from .track import Track


def predict_position(track: Track, damping: float = 0.8) -> Tuple[float, float]:
    """
    Predict where a track will be on the next tick.

    Args:
        track: Track to project
        damping: Velocity multiplier (0 = no prediction)

    Returns:
        Predicted (x, y)
    """
    return (track.x + track.vx * damping, track.y + track.vy * damping)


def predict_positions(tracks: Iterable[Track], damping: float = 0.8) -> np.ndarray:
    """Predicted positions of several tracks as an (N, 2) array, in input order."""
    predicted: List[Tuple[float, float]] = [predict_position(t, damping) for t in tracks]
    if not predicted:
        return np.empty((0, 2), dtype=np.float64)
    return np.array(predicted, dtype=np.float64)
