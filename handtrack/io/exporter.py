"""
Track Exporter

Writes tracking output for offline inspection:
    - Tick-by-tick track rows to CSV
    - Tracker configuration to the HandTrack YAML scenario format
"""

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List

import yaml

from handtrack.tracking.config import TrackerConfig
from handtrack.tracking.track import Track

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "tick",
    "id",
    "x",
    "y",
    "vx",
    "vy",
    "side",
    "alpha",
    "frames_missing",
    "frames_detected",
]


def export_history_to_csv(history: Iterable[List[Track]], filepath: str) -> int:
    """
    Write one row per (tick, live track).

    Args:
        history: Per-tick track lists, in tick order
        filepath: Output CSV path

    Returns:
        Number of rows written
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    rows = 0
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for tick, tracks in enumerate(history):
            for track in tracks:
                writer.writerow({"tick": tick, **track.to_dict()})
                rows += 1

    logger.info("Exported %d track rows to %s", rows, path)
    return rows


def export_config_to_yaml(
    config: TrackerConfig,
    filepath: str,
    scenario_name: str = "Custom Scenario",
    description: str = "",
) -> None:
    """
    Export a tracker configuration as a scenario header.

    The file carries the ``scenario`` and ``tracker`` sections; add
    ``frames`` or ``synthetic`` before loading it as a scenario.

    Args:
        config: Tracker configuration
        filepath: Output file path
        scenario_name: Human-readable scenario name
        description: Scenario description
    """
    data = {
        "scenario": {
            "name": scenario_name,
            "description": description
            or f"Exported on {datetime.now().strftime('%Y-%m-%d %H:%M')}",
            "version": "1.0",
        },
        "tracker": config.to_dict(),
    }

    with open(filepath, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    logger.info("Tracker configuration saved to %s", filepath)


def get_default_filename(extension: str = "csv") -> str:
    """Generate default filename with timestamp."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"tracks_{timestamp}.{extension}"
