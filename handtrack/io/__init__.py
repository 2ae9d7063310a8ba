"""
HandTrack I/O Package

Scenario loading and track export.
"""

from .exporter import export_config_to_yaml, export_history_to_csv
from .scenario_loader import ScenarioConfig, ScenarioLoader, load_scenario

__all__ = [
    "ScenarioConfig",
    "ScenarioLoader",
    "export_config_to_yaml",
    "export_history_to_csv",
    "load_scenario",
]
