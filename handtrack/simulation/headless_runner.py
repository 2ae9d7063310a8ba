"""
Headless Tracking Runner

Replays a detection stream through the hand tracker without any display,
collecting quality statistics for tuning and Monte Carlo analysis.

Metrics:
    tracks_created   Tracks spawned over the run
    tracks_evicted   Tracks dropped after the persistence window
    peak_tracks      Largest number of simultaneous live tracks
    fragmentation    Tracks created beyond the number of true hands
    mean_jitter      Mean |v_t - v_{t-1}| of tracks matched on both ticks
    mean_error       Mean distance from each true hand to its nearest track
    coverage         Fraction of (tick, true hand) pairs with a stable
                     track within coverage_radius

Usage:
    config = RunConfig(scenario=SyntheticScenario(hands=default_hands(), seed=1))
    runner = HeadlessRunner(config)
    result = runner.run()
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Tuple

from handtrack.tracking.config import DEFAULT_CONFIG, TrackerConfig
from handtrack.tracking.track import Detection, Track
from handtrack.tracking.tracker import HandTracker

from .synthetic import SyntheticFrames, SyntheticScenario, generate_frames

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """
    Configuration for a headless run.

    Attributes:
        name: Label used in logs and CSV output
        tracker: Tracker configuration
        scenario: Synthetic scenario (used when frames is None)
        frames: Scripted per-tick detections
        coverage_radius: Distance within which a stable track covers a hand
        keep_history: Keep every tick's track list on the result
    """

    name: str = "run"
    tracker: TrackerConfig = DEFAULT_CONFIG
    scenario: Optional[SyntheticScenario] = None
    frames: Optional[List[List[Detection]]] = None
    coverage_radius: float = 60.0
    keep_history: bool = False


@dataclass
class RunResult:
    """
    Results from a headless run.

    Attributes:
        config: Original configuration
        n_ticks: Ticks processed
        n_detections: Detections fed to the tracker
        tracks_created: Tracks spawned
        tracks_evicted: Tracks evicted
        peak_tracks: Maximum simultaneous live tracks
        final_tracks: Live tracks after the last tick
        fragmentation: Extra tracks beyond the true hand count (truth only)
        mean_jitter: Mean per-tick velocity change of matched tracks
        mean_error: Mean truth-to-nearest-track distance (truth only)
        coverage: Fraction of truth samples covered by a stable track
        runtime_s: Wall-clock execution time
        history: Per-tick track lists if requested
    """

    config: RunConfig
    n_ticks: int = 0
    n_detections: int = 0
    tracks_created: int = 0
    tracks_evicted: int = 0
    peak_tracks: int = 0
    final_tracks: int = 0
    fragmentation: Optional[int] = None
    mean_jitter: float = 0.0
    mean_error: Optional[float] = None
    coverage: Optional[float] = None
    runtime_s: float = 0.0
    history: List[List[Track]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for CSV/JSON export."""
        scenario = self.config.scenario
        return {
            "name": self.config.name,
            "association": self.config.tracker.association.value,
            "noise_std": scenario.noise_std if scenario else None,
            "dropout_prob": scenario.dropout_prob if scenario else None,
            "side_flip_prob": scenario.side_flip_prob if scenario else None,
            "seed": scenario.seed if scenario else None,
            "n_ticks": self.n_ticks,
            "n_detections": self.n_detections,
            "tracks_created": self.tracks_created,
            "tracks_evicted": self.tracks_evicted,
            "peak_tracks": self.peak_tracks,
            "final_tracks": self.final_tracks,
            "fragmentation": self.fragmentation,
            "mean_jitter": self.mean_jitter,
            "mean_error": self.mean_error,
            "coverage": self.coverage,
            "runtime_s": self.runtime_s,
        }


class HeadlessRunner:
    """
    Headless tracking runner.

    Feeds a scripted or synthetic detection stream through a HandTracker,
    one list per tick, and accumulates quality statistics.
    """

    def __init__(self, config: RunConfig, recorder=None):
        """
        Initialize headless runner.

        Args:
            config: Run configuration
            recorder: Optional SessionRecorder receiving every tick

        Raises:
            ValueError: If neither frames nor a scenario is given
        """
        if config.frames is None and config.scenario is None:
            raise ValueError("RunConfig needs either frames or a scenario")

        self.config = config
        self.recorder = recorder
        self.tracker = HandTracker(config.tracker)

    def _load_frames(self) -> Tuple[List[List[Detection]], Optional[SyntheticFrames]]:
        if self.config.frames is not None:
            return self.config.frames, None
        synthetic = generate_frames(self.config.scenario)
        return synthetic.detections, synthetic

    def run(self) -> RunResult:
        """
        Execute the run.

        Returns:
            RunResult with tracking statistics
        """
        start_time = time.perf_counter()
        self.tracker.clear()

        frames, synthetic = self._load_frames()
        result = RunResult(config=self.config)

        prev_velocity: Dict[Hashable, Tuple[float, float]] = {}
        jitter_samples: List[float] = []
        error_samples: List[float] = []
        covered = 0
        truth_samples = 0

        for t, detections in enumerate(frames):
            tracks = self.tracker.update(detections)
            result.n_detections += len(detections)
            result.peak_tracks = max(result.peak_tracks, len(tracks))

            if self.recorder is not None:
                self.recorder.record_tick(t, tracks, n_detections=len(detections))
            if self.config.keep_history:
                result.history.append(tracks)

            next_velocity: Dict[Hashable, Tuple[float, float]] = {}
            for track in tracks:
                if track.frames_missing == 0:
                    if track.id in prev_velocity:
                        pvx, pvy = prev_velocity[track.id]
                        jitter_samples.append(math.hypot(track.vx - pvx, track.vy - pvy))
                    next_velocity[track.id] = track.velocity
            prev_velocity = next_velocity

            if synthetic is not None:
                stable = self.tracker.stable_tracks()
                for _, tx, ty in synthetic.truth[t]:
                    truth_samples += 1
                    if tracks:
                        error_samples.append(
                            min(math.hypot(tr.x - tx, tr.y - ty) for tr in tracks)
                        )
                    if any(
                        math.hypot(tr.x - tx, tr.y - ty) < self.config.coverage_radius
                        for tr in stable
                    ):
                        covered += 1

        result.n_ticks = len(frames)
        result.tracks_created = self.tracker.total_created
        result.tracks_evicted = self.tracker.total_evicted
        result.final_tracks = len(self.tracker.tracks)
        result.mean_jitter = sum(jitter_samples) / len(jitter_samples) if jitter_samples else 0.0

        if synthetic is not None:
            n_hands = len(self.config.scenario.hands)
            result.fragmentation = max(0, result.tracks_created - n_hands)
            result.mean_error = sum(error_samples) / len(error_samples) if error_samples else None
            result.coverage = covered / truth_samples if truth_samples else None

        result.runtime_s = time.perf_counter() - start_time
        logger.info(
            "Run '%s': %d ticks, %d tracks created, %d evicted, peak %d",
            self.config.name,
            result.n_ticks,
            result.tracks_created,
            result.tracks_evicted,
            result.peak_tracks,
        )
        return result


def run_single_simulation(config: RunConfig) -> RunResult:
    """
    Convenience function for multiprocessing.

    Args:
        config: Run configuration

    Returns:
        Run result
    """
    runner = HeadlessRunner(config)
    return runner.run()
