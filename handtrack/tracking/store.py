"""
Track Store

The authoritative, immutable collection of tracks carried from tick to tick,
and the single per-tick transform:

    next_store = tick(store, detections, config)

Steps:
    1. Predict every track (association only)
    2. Associate detections to tracks (gated, side-weighted)
    3. Smooth matched tracks and apply the matched transition
    4. Coast or evict unmatched tracks
    5. Spawn tracks from unused detections

Output order is surviving tracks in their previous order followed by new
tracks in detection order, so store order is track age (oldest first).
Track ids come from a counter held in the store; they are never reused.
"""

from dataclasses import dataclass
from typing import Hashable, Iterable, Iterator, List, Optional, Tuple

from .associator import associate
from .config import DEFAULT_CONFIG, TrackerConfig
from .lifecycle import coast, mark_matched, spawn
from .smoother import smooth
from .track import Detection, Track


@dataclass(frozen=True)
class TrackStore:
    """
    Snapshot of all live tracks.

    Attributes:
        tracks: Live tracks, oldest first
        next_id: Id handed to the next created track
    """

    tracks: Tuple[Track, ...] = ()
    next_id: int = 1

    def __len__(self) -> int:
        return len(self.tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self.tracks)

    def get(self, track_id: Hashable) -> Optional[Track]:
        """Get track by ID."""
        for track in self.tracks:
            if track.id == track_id:
                return track
        return None

    @property
    def ids(self) -> List[Hashable]:
        return [t.id for t in self.tracks]


EMPTY_STORE = TrackStore()


def tick(
    store: TrackStore,
    detections: Iterable[Detection],
    config: TrackerConfig = DEFAULT_CONFIG,
) -> TrackStore:
    """
    Advance the store by one rendered frame.

    Deterministic and free of side effects: the input store is left intact.

    Args:
        store: Previous snapshot
        detections: This tick's detections (may be empty)
        config: Tracker configuration

    Returns:
        Next snapshot
    """
    detections = list(detections)
    tracks = store.tracks

    assoc = associate(tracks, detections, config)

    next_tracks: List[Track] = []
    for idx, track in enumerate(tracks):
        det_idx = assoc.matches.get(idx)
        if det_idx is not None:
            next_tracks.append(mark_matched(smooth(track, detections[det_idx], config)))
        else:
            coasted = coast(track, config)
            if coasted is not None:
                next_tracks.append(coasted)

    next_id = store.next_id
    for det_idx in assoc.unassigned_detections:
        next_tracks.append(spawn(detections[det_idx], next_id))
        next_id += 1

    return TrackStore(tracks=tuple(next_tracks), next_id=next_id)
