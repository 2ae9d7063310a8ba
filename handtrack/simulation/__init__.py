"""
HandTrack Simulation Package

Synthetic detection streams, headless replay and batch tuning tools.
"""

from .headless_runner import HeadlessRunner, RunConfig, RunResult, run_single_simulation
from .scenario_generator import ParameterSpace, ScenarioGenerator
from .synthetic import HandPath, SyntheticFrames, SyntheticScenario, default_hands, generate_frames

__all__ = [
    "HandPath",
    "HeadlessRunner",
    "ParameterSpace",
    "RunConfig",
    "RunResult",
    "ScenarioGenerator",
    "SyntheticFrames",
    "SyntheticScenario",
    "default_hands",
    "generate_frames",
    "run_single_simulation",
]
