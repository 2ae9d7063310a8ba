"""
Detection-to-Track Association

Pairs predicted track positions with the current tick's detections.

Cost:
    weighted = ||detection - predicted|| * (same_side_weight if labels agree else 1.0)

A pair is admissible only if its weighted cost is strictly below the gate
(``max_match_dist``). Same-side candidates are favoured by shrinking their
effective distance.

Strategies:
    GREEDY  - Tracks are visited in store order (oldest first). Each takes
              the cheapest unused admissible detection; ties go to the
              earliest detection. Contention between two tracks for one
              detection is settled by age alone, not by a joint minimum.
    OPTIMAL - Minimum total cost bipartite matching over the same gated
              cost matrix (Hungarian algorithm). Changes observable
              behaviour under contention; opt-in only.

Reference:
    - Blackman, S. "Multiple-Target Tracking with Radar Applications", 1986
    - Kuhn, H. W. "The Hungarian Method for the Assignment Problem", 1955
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import numpy as np
from scipy.optimize import linear_sum_assignment

from .config import DEFAULT_CONFIG, AssociationMethod, TrackerConfig
from .predictor import predict_positions
from .track import Detection, Track


@dataclass
class Association:
    """
    Result of one association pass.

    Attributes:
        matches: {track index: detection index}
        unassigned_tracks: Track indices left without a detection, in order
        unassigned_detections: Detection indices left unused, in order
    """

    matches: Dict[int, int] = field(default_factory=dict)
    unassigned_tracks: List[int] = field(default_factory=list)
    unassigned_detections: List[int] = field(default_factory=list)


def weighted_distance_matrix(
    tracks: Sequence[Track],
    detections: Sequence[Detection],
    config: TrackerConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """
    Side-weighted distances between predicted tracks and detections.

    Args:
        tracks: Current tracks (rows)
        detections: This tick's detections (columns)
        config: Tracker configuration

    Returns:
        (n_tracks, n_detections) cost matrix
    """
    n_tracks, n_dets = len(tracks), len(detections)
    if n_tracks == 0 or n_dets == 0:
        return np.zeros((n_tracks, n_dets), dtype=np.float64)

    predicted = predict_positions(tracks, config.prediction_damping)
    det_xy = np.array([d.position for d in detections], dtype=np.float64)

    dx = det_xy[np.newaxis, :, 0] - predicted[:, np.newaxis, 0]
    dy = det_xy[np.newaxis, :, 1] - predicted[:, np.newaxis, 1]
    dist = np.sqrt(dx**2 + dy**2)

    same_side = np.array(
        [[t.side is d.side for d in detections] for t in tracks], dtype=bool
    )
    weights = np.where(same_side, config.same_side_weight, 1.0)
    return dist * weights


def associate(
    tracks: Sequence[Track],
    detections: Sequence[Detection],
    config: TrackerConfig = DEFAULT_CONFIG,
) -> Association:
    """
    Associate detections to tracks with the configured strategy.

    Args:
        tracks: Current tracks in store (insertion) order
        detections: This tick's detections
        config: Tracker configuration

    Returns:
        Association with each track and detection used at most once
    """
    cost = weighted_distance_matrix(tracks, detections, config)
    if config.association is AssociationMethod.OPTIMAL:
        matches = _match_optimal(cost, config.max_match_dist)
    else:
        matches = _match_greedy(cost, config.max_match_dist)

    used = set(matches.values())
    return Association(
        matches=matches,
        unassigned_tracks=[i for i in range(len(tracks)) if i not in matches],
        unassigned_detections=[j for j in range(len(detections)) if j not in used],
    )


def _match_greedy(cost: np.ndarray, gate: float) -> Dict[int, int]:
    """Oldest-track-first nearest neighbour with gating."""
    matches: Dict[int, int] = {}
    n_tracks, n_dets = cost.shape
    if n_tracks == 0 or n_dets == 0:
        return matches

    available = np.ones(n_dets, dtype=bool)
    for row in range(n_tracks):
        if not available.any():
            break
        candidates = np.where(available, cost[row], np.inf)
        best = int(np.argmin(candidates))  # first index on ties
        if candidates[best] < gate:
            matches[row] = best
            available[best] = False
    return matches


def _match_optimal(cost: np.ndarray, gate: float) -> Dict[int, int]:
    """Minimum-cost assignment; inadmissible pairs are dropped after solving."""
    n_tracks, n_dets = cost.shape
    if n_tracks == 0 or n_dets == 0:
        return {}

    # Penalty larger than any sum of admissible costs, so the solver first
    # maximises the number of admissible pairs.
    penalty = gate * (min(n_tracks, n_dets) + 1)
    gated = np.where(cost < gate, cost, penalty)
    rows, cols = linear_sum_assignment(gated)
    return {int(r): int(c) for r, c in zip(rows, cols) if cost[r, c] < gate}
