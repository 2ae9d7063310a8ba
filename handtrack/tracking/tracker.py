"""
Hand Tracker

Stateful facade over the pure ``tick`` transform for host render loops.
Holds the current TrackStore, logs track creation and eviction, and keeps a
bounded position trail per live track for rendering.

Call ``update`` exactly once per rendered frame, with an empty list when the
perception boundary produced nothing new.
"""

import logging
from collections import deque
from typing import Deque, Dict, Hashable, Iterable, List, Optional, Tuple

from .config import DEFAULT_CONFIG, TrackerConfig
from .lifecycle import TrackStatus, track_status
from .store import EMPTY_STORE, TrackStore, tick
from .track import Detection, Track

logger = logging.getLogger(__name__)


class HandTracker:
    """
    Multi-hand tracker with gated, side-aware association.

    Features:
        - Automatic track initiation from unused detections
        - Oldest-first greedy association (or opt-in optimal assignment)
        - Adaptive smoothing of matched tracks
        - Inertial coasting with grace-period fade-out
        - Eviction after the persistence window
        - Track trails for display

    Example:
        >>> tracker = HandTracker()
        >>> tracks = tracker.update([Detection(640, 360, Side.RIGHT)])
        >>> for track in tracks:
        ...     print(f"Track {track.id}: {track.position}")
    """

    def __init__(self, config: TrackerConfig = DEFAULT_CONFIG, max_history: int = 30) -> None:
        """
        Initialize hand tracker.

        Args:
            config: Tracker configuration
            max_history: Maximum trail length per track
        """
        self.config = config
        self.max_history = max_history

        self.store: TrackStore = EMPTY_STORE
        self.history: Dict[Hashable, Deque[Tuple[float, float]]] = {}
        self.frame_count = 0
        self.total_created = 0
        self.total_evicted = 0

        logger.debug("HandTracker initialized: %s", config)

    @property
    def tracks(self) -> List[Track]:
        return list(self.store.tracks)

    def update(self, detections: Iterable[Detection]) -> List[Track]:
        """
        Process one tick of detections.

        Args:
            detections: Detections of this tick (may be empty)

        Returns:
            List of live tracks, oldest first
        """
        previous_ids = set(self.store.ids)
        self.store = tick(self.store, detections, self.config)
        self.frame_count += 1

        current_ids = set(self.store.ids)
        for track_id in previous_ids - current_ids:
            self.total_evicted += 1
            self.history.pop(track_id, None)
            logger.debug("Track %s evicted at frame %d", track_id, self.frame_count)

        for track in self.store.tracks:
            if track.id not in previous_ids:
                self.total_created += 1
                logger.debug(
                    "Track %s created at (%.1f, %.1f) side=%s",
                    track.id,
                    track.x,
                    track.y,
                    track.side.value,
                )

            trail = self.history.get(track.id)
            if trail is None:
                trail = self.history[track.id] = deque(maxlen=self.max_history)
            trail.append(track.position)

        return self.tracks

    def stable_tracks(self) -> List[Track]:
        """Get tracks trusted for interaction (frames_detected >= threshold)."""
        return [
            t for t in self.store.tracks if t.frames_detected >= self.config.stability_threshold
        ]

    def status_of(self, track: Track) -> TrackStatus:
        return track_status(track, self.config)

    def get_track_by_id(self, track_id: Hashable) -> Optional[Track]:
        """Get track by ID."""
        return self.store.get(track_id)

    def clear(self) -> None:
        """Drop all tracks and restart ids."""
        self.store = EMPTY_STORE
        self.history.clear()
        self.frame_count = 0
        self.total_created = 0
        self.total_evicted = 0
