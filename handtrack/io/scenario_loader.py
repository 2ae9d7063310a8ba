"""
Scenario Loader

YAML-based scenario configuration parser for HandTrack.

Loads tracking scenarios from YAML files and creates configured
HeadlessRunner instances.

Supported scenario elements:
    - Scenario metadata (name, description)
    - Tracker configuration overrides
    - Scripted frames (explicit detection lists per tick)
    - Synthetic streams (hand paths, noise, dropouts, seed)

Example file:
    scenario:
      name: Two hands crossing
    tracker:
      max_match_dist: 300
    synthetic:
      n_ticks: 240
      noise_std: 4.0
      seed: 7
      hands:
        - side: Left
          start: {x: 300, y: 360}
          velocity: {vx: 3, vy: 0}
          dropouts: [[100, 112]]
    # or, instead of synthetic:
    frames:
      - [{x: 100, y: 100, side: Right}]
      - []

Usage:
    loader = ScenarioLoader('scenarios/two_hands_crossing.yaml')
    runner = loader.create_runner()
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml

from handtrack.simulation.headless_runner import HeadlessRunner, RunConfig
from handtrack.simulation.synthetic import HandPath, SyntheticScenario, default_hands
from handtrack.tracking.config import TrackerConfig
from handtrack.tracking.track import Detection, Side

logger = logging.getLogger(__name__)


@dataclass
class ScenarioConfig:
    """Complete scenario configuration."""

    name: str
    description: str
    tracker: TrackerConfig
    frames: Optional[List[List[Detection]]] = None
    synthetic: Optional[SyntheticScenario] = None


class ScenarioLoader:
    """
    Loads tracking scenarios from YAML files.

    Usage:
        loader = ScenarioLoader('scenarios/two_hands_crossing.yaml')
        config = loader.get_config()
        runner = loader.create_runner()
    """

    def __init__(self, filepath: Optional[str] = None):
        """
        Initialize scenario loader.

        Args:
            filepath: Path to YAML scenario file (optional)
        """
        self.filepath = filepath
        self.data: Dict[str, Any] = {}
        self._config: Optional[ScenarioConfig] = None

        if filepath:
            self.load(filepath)

    def load(self, filepath: str) -> bool:
        """
        Load scenario from YAML file.

        Args:
            filepath: Path to YAML scenario file

        Returns:
            True if loaded successfully

        Raises:
            FileNotFoundError: If file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            ValueError: If scenario content is malformed
        """
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Scenario file not found: {filepath}")

        self.filepath = filepath

        with open(filepath, "r", encoding="utf-8") as f:
            self.data = yaml.safe_load(f) or {}

        self.load_dict(self.data)
        logger.info("Loaded scenario '%s' from %s", self._config.name, filepath)
        return True

    def load_dict(self, data: Dict[str, Any]) -> ScenarioConfig:
        """
        Parse an already-decoded scenario mapping.

        Args:
            data: Scenario mapping

        Returns:
            ScenarioConfig
        """
        if not isinstance(data, dict):
            raise ValueError("Scenario root must be a mapping")
        self.data = data
        self._config = self._parse_config()
        return self._config

    def _parse_config(self) -> ScenarioConfig:
        """Parse loaded YAML data into ScenarioConfig."""
        scenario = _require_mapping(self.data.get("scenario") or {}, "'scenario'")
        tracker_data = _require_mapping(self.data.get("tracker") or {}, "'tracker'")
        try:
            tracker = TrackerConfig.from_dict(tracker_data)
        except TypeError as e:
            raise ValueError(f"'tracker': {e}") from e

        frames = None
        synthetic = None
        if "frames" in self.data:
            frames = self._parse_frames(self.data["frames"])
        elif "synthetic" in self.data:
            synthetic = self._parse_synthetic(
                _require_mapping(self.data["synthetic"] or {}, "'synthetic'")
            )
        else:
            raise ValueError("Scenario needs either a 'frames' or a 'synthetic' section")

        return ScenarioConfig(
            name=scenario.get("name", "Unnamed Scenario"),
            description=scenario.get("description", ""),
            tracker=tracker,
            frames=frames,
            synthetic=synthetic,
        )

    def _parse_frames(self, raw_frames: Any) -> List[List[Detection]]:
        """Parse scripted per-tick detection lists."""
        if not isinstance(raw_frames, list):
            raise ValueError("'frames' must be a list of detection lists")

        frames = []
        for t, raw in enumerate(raw_frames):
            raw = raw or []
            if not isinstance(raw, list):
                raise ValueError(f"Frame {t} must be a list of detections")
            frames.append(
                [_parse_detection(d, f"Frame {t} detection {i}") for i, d in enumerate(raw)]
            )
        return frames

    def _parse_synthetic(self, syn: Dict[str, Any]) -> SyntheticScenario:
        """Parse a synthetic stream definition."""
        raw_hands = syn.get("hands") or []
        if not isinstance(raw_hands, list):
            raise ValueError("'synthetic.hands' must be a list")

        hands = []
        for i, h in enumerate(raw_hands):
            where = f"Hand {i}"
            h = _require_mapping(h, where)
            start = _require_mapping(h.get("start") or {}, f"{where} 'start'")
            vel = _require_mapping(h.get("velocity") or {}, f"{where} 'velocity'")
            end_tick = h.get("end_tick")
            try:
                hands.append(
                    HandPath(
                        side=Side.parse(h.get("side", "Right")),
                        start=(float(start.get("x", 0)), float(start.get("y", 0))),
                        velocity=(float(vel.get("vx", 0)), float(vel.get("vy", 0))),
                        amplitude=float(h.get("amplitude", 0.0)),
                        period=float(h.get("period", 60.0)),
                        start_tick=int(h.get("start_tick", 0)),
                        end_tick=int(end_tick) if end_tick is not None else None,
                        dropouts=[(int(a), int(b)) for a, b in h.get("dropouts") or []],
                    )
                )
            except (TypeError, ValueError) as e:
                raise ValueError(f"{where}: {e}") from e

        seed = syn.get("seed")
        try:
            return SyntheticScenario(
                hands=hands or default_hands(),
                n_ticks=int(syn.get("n_ticks", 300)),
                noise_std=float(syn.get("noise_std", 3.0)),
                dropout_prob=float(syn.get("dropout_prob", 0.0)),
                side_flip_prob=float(syn.get("side_flip_prob", 0.0)),
                shuffle=bool(syn.get("shuffle", True)),
                seed=int(seed) if seed is not None else None,
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"'synthetic': {e}") from e

    def get_config(self) -> Optional[ScenarioConfig]:
        """
        Get parsed scenario configuration.

        Returns:
            ScenarioConfig or None if not loaded
        """
        return self._config

    def get_scenario_name(self) -> str:
        """Get scenario name."""
        if self._config:
            return self._config.name
        return "Unknown"

    def create_runner(self, keep_history: bool = False, recorder=None) -> HeadlessRunner:
        """
        Create a HeadlessRunner from the loaded scenario.

        Args:
            keep_history: Keep per-tick track lists on the result
            recorder: Optional SessionRecorder

        Returns:
            Configured HeadlessRunner instance

        Raises:
            ValueError: If no scenario is loaded
        """
        if not self._config:
            raise ValueError("No scenario loaded. Call load() first.")

        run_config = RunConfig(
            name=self._config.name,
            tracker=self._config.tracker,
            scenario=self._config.synthetic,
            frames=self._config.frames,
            keep_history=keep_history,
        )
        return HeadlessRunner(run_config, recorder=recorder)


def load_scenario(filepath: str) -> ScenarioConfig:
    """
    Convenience function to load a scenario file.

    Args:
        filepath: Path to YAML scenario file

    Returns:
        ScenarioConfig instance
    """
    loader = ScenarioLoader(filepath)
    return loader.get_config()


def _require_mapping(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def _parse_detection(raw: Any, where: str) -> Detection:
    """Build one scripted detection, reporting its frame position on failure."""
    raw = _require_mapping(raw, where)
    missing = [key for key in ("x", "y", "side") if key not in raw]
    if missing:
        raise ValueError(f"{where}: missing {', '.join(missing)}")
    try:
        return Detection(x=float(raw["x"]), y=float(raw["y"]), side=Side.parse(raw["side"]))
    except (TypeError, ValueError) as e:
        raise ValueError(f"{where}: {e}") from e
