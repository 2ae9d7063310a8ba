"""
HDF5 Session Recorder

Saves tracking session data to HDF5 files for post-analysis and replay.

Features:
    - Tracker configuration storage
    - Per-track sample arrays with tick indices
    - Detection counts per tick
    - Automatic filename with timestamp

Reference: HDF5 Best Practices for Scientific Data
"""

import json
import threading
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import h5py
import numpy as np

from handtrack.tracking.track import Side, Track

SAMPLE_COLUMNS = (
    "tick",
    "x",
    "y",
    "vx",
    "vy",
    "alpha",
    "frames_missing",
    "frames_detected",
    "side",
)


@dataclass
class RecordingSession:
    """
    Session data accumulator for HDF5 recording.

    Attributes:
        config: Tracker configuration dictionary
        track_samples: Dict of track_id -> list of sample rows
        detection_counts: Detections received per recorded tick
        ticks: Recorded tick indices
    """

    config: Dict[str, Any] = field(default_factory=dict)
    track_samples: Dict[Any, List[List[float]]] = field(default_factory=dict)
    detection_counts: List[int] = field(default_factory=list)
    ticks: List[int] = field(default_factory=list)

    def clear(self):
        """Clear all recorded data."""
        self.config = {}
        self.track_samples = {}
        self.detection_counts = []
        self.ticks = []


class SessionRecorder:
    """
    HDF5 tracking session recorder.

    File Structure:
        /config (attrs)
        /tracks/{track_id}
            - samples (Nx9 array: tick, x, y, vx, vy, alpha,
                       frames_missing, frames_detected, side)
              side: 0 = Left, 1 = Right
        /ticks
        /detections_per_tick
    """

    def __init__(self, output_dir: str = "output"):
        """
        Initialize session recorder.

        Args:
            output_dir: Directory for HDF5 output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.session = RecordingSession()
        self.is_recording = False
        self._lock = threading.Lock()

    def start_recording(self, config: Dict[str, Any]):
        """
        Start a new recording session.

        Args:
            config: Tracker configuration dictionary
        """
        with self._lock:
            self.session.clear()
            self.session.config = dict(config)
            self.is_recording = True

    def stop_recording(self, filename: Optional[str] = None) -> Optional[str]:
        """
        Stop recording and save to HDF5.

        Args:
            filename: Output file name (default: timestamped)

        Returns:
            Path to saved file, or None if no data
        """
        with self._lock:
            self.is_recording = False

            if not self.session.ticks:
                return None

            return self._save_to_hdf5(filename)

    def record_tick(self, tick: int, tracks: Iterable[Track], n_detections: int = 0):
        """
        Record one tick's track list.

        Args:
            tick: Tick index
            tracks: Live tracks after the tick
            n_detections: Detections fed into the tick
        """
        with self._lock:
            if not self.is_recording:
                return

            self.session.ticks.append(int(tick))
            self.session.detection_counts.append(int(n_detections))

            for track in tracks:
                rows = self.session.track_samples.setdefault(track.id, [])
                rows.append(
                    [
                        float(tick),
                        track.x,
                        track.y,
                        track.vx,
                        track.vy,
                        track.alpha,
                        float(track.frames_missing),
                        float(track.frames_detected),
                        0.0 if track.side is Side.LEFT else 1.0,
                    ]
                )

    def _save_to_hdf5(self, filename: Optional[str] = None) -> str:
        """
        Save session data to HDF5 file.

        Returns:
            Path to saved file
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.output_dir / (filename or f"session_{timestamp}.h5")

        with h5py.File(filepath, "w") as f:
            config_group = f.create_group("config")
            for key, value in self.session.config.items():
                if isinstance(value, (int, float, str, bool)):
                    config_group.attrs[key] = value
                else:
                    config_group.attrs[key] = json.dumps(value)

            tracks_group = f.create_group("tracks")
            for track_id, rows in self.session.track_samples.items():
                track_group = tracks_group.create_group(str(track_id))
                track_group.create_dataset("samples", data=np.array(rows, dtype=np.float64))
                track_group.attrs["columns"] = json.dumps(list(SAMPLE_COLUMNS))

            f.create_dataset("ticks", data=np.array(self.session.ticks, dtype=np.int64))
            f.create_dataset(
                "detections_per_tick",
                data=np.array(self.session.detection_counts, dtype=np.int64),
            )

            f.attrs["version"] = "1.0"
            f.attrs["created"] = timestamp
            f.attrs["software"] = "HandTrack"

        return str(filepath)

    def get_recording_stats(self) -> Dict[str, Any]:
        """
        Get current recording statistics.

        Returns:
            Dict with recording stats
        """
        with self._lock:
            return {
                "is_recording": self.is_recording,
                "num_ticks": len(self.session.ticks),
                "num_tracks": len(self.session.track_samples),
                "num_detections": sum(self.session.detection_counts),
            }


def validate_hdf5_structure(filepath: str) -> Dict[str, Any]:
    """
    Validate HDF5 file structure.

    Args:
        filepath: Path to HDF5 file

    Returns:
        Validation result dictionary
    """
    result = {"valid": True, "groups": [], "datasets": [], "errors": []}

    with h5py.File(filepath, "r") as f:
        for group_name in ["config", "tracks"]:
            if group_name in f:
                result["groups"].append(group_name)
            else:
                result["errors"].append(f"Missing group: {group_name}")
                result["valid"] = False

        for dataset_name in ["ticks", "detections_per_tick"]:
            if dataset_name not in f:
                result["errors"].append(f"Missing dataset: {dataset_name}")
                result["valid"] = False

        def visitor(name, obj):
            if isinstance(obj, h5py.Dataset):
                result["datasets"].append(name)
                if name.endswith("/samples") and obj.shape[1:] != (len(SAMPLE_COLUMNS),):
                    result["errors"].append(f"Bad sample shape in {name}: {obj.shape}")
                    result["valid"] = False

        f.visititems(visitor)

    return result
