"""
Scenario Generator

Generates run configurations from parameter ranges for Monte Carlo tuning
of the tracker.

Features:
    - Cartesian product of noise, dropout and association settings
    - Several seeded runs per configuration
    - Shared base tracker configuration and hand paths

Usage:
    space = ParameterSpace(
        noise_stds=[1, 4, 8],
        dropout_probs=[0.0, 0.2],
    )
    configs = ScenarioGenerator.generate(space)
"""

from dataclasses import dataclass, field, replace
from itertools import product
from typing import Iterator, List

import numpy as np

from handtrack.tracking.config import DEFAULT_CONFIG, AssociationMethod, TrackerConfig

from .headless_runner import RunConfig
from .synthetic import HandPath, SyntheticScenario, default_hands


@dataclass
class ParameterSpace:
    """
    Parameter space definition for Monte Carlo sweep.

    Attributes:
        noise_stds: Measurement noise levels
        dropout_probs: Per-tick detection dropout probabilities
        association_methods: Assignment strategies to compare
        n_runs_per_config: Number of seeded runs per configuration
        n_ticks: Ticks per run
        side_flip_prob: Fixed side-label flip probability
        hands: Ground-truth hand paths shared by every run
        tracker: Base tracker configuration
    """

    noise_stds: List[float] = field(default_factory=lambda: [1.0, 3.0, 6.0, 10.0])
    dropout_probs: List[float] = field(default_factory=lambda: [0.0, 0.1, 0.3])
    association_methods: List[AssociationMethod] = field(
        default_factory=lambda: [AssociationMethod.GREEDY]
    )
    n_runs_per_config: int = 5

    # Fixed parameters
    n_ticks: int = 300
    side_flip_prob: float = 0.0
    hands: List[HandPath] = field(default_factory=default_hands)
    tracker: TrackerConfig = DEFAULT_CONFIG

    @property
    def total_configs(self) -> int:
        """Total number of configurations."""
        return len(self.noise_stds) * len(self.dropout_probs) * len(self.association_methods)

    @property
    def total_runs(self) -> int:
        """Total number of simulation runs."""
        return self.total_configs * self.n_runs_per_config


class ScenarioGenerator:
    """
    Generates run configurations from a parameter space.
    """

    @staticmethod
    def _make_config(
        space: ParameterSpace,
        noise_std: float,
        dropout_prob: float,
        method: AssociationMethod,
        run_idx: int,
        seed: int,
    ) -> RunConfig:
        scenario = SyntheticScenario(
            hands=space.hands,
            n_ticks=space.n_ticks,
            noise_std=noise_std,
            dropout_prob=dropout_prob,
            side_flip_prob=space.side_flip_prob,
            seed=seed,
        )
        return RunConfig(
            name=f"noise{noise_std:g}_drop{dropout_prob:g}_{method.value}_r{run_idx}",
            tracker=replace(space.tracker, association=method),
            scenario=scenario,
        )

    @staticmethod
    def generate(space: ParameterSpace) -> List[RunConfig]:
        """
        Generate all configurations from parameter space.

        Args:
            space: Parameter space definition

        Returns:
            List of RunConfig objects
        """
        return list(ScenarioGenerator.generate_iterator(space))

    @staticmethod
    def generate_iterator(space: ParameterSpace) -> Iterator[RunConfig]:
        """
        Generate configurations as iterator (memory efficient).

        Args:
            space: Parameter space definition

        Yields:
            RunConfig objects
        """
        n_noise = len(space.noise_stds)
        n_drop = len(space.dropout_probs)
        grid = product(
            enumerate(space.noise_stds), enumerate(space.dropout_probs), space.association_methods
        )
        for (i_noise, noise_std), (i_drop, dropout_prob), method in grid:
            for run_idx in range(space.n_runs_per_config):
                # One seed per (noise, dropout, run) cell, shared across methods
                seed = (run_idx * n_noise + i_noise) * n_drop + i_drop
                yield ScenarioGenerator._make_config(
                    space, noise_std, dropout_prob, method, run_idx, seed
                )

    @staticmethod
    def quick_sweep(
        noise_min: float = 0.0,
        noise_max: float = 12.0,
        n_levels: int = 7,
        n_runs: int = 3,
    ) -> List[RunConfig]:
        """
        Quick noise sweep for a jitter-vs-noise curve.

        Args:
            noise_min: Minimum noise standard deviation
            noise_max: Maximum noise standard deviation
            n_levels: Number of noise levels
            n_runs: Runs per level

        Returns:
            List of configs
        """
        space = ParameterSpace(
            noise_stds=[float(v) for v in np.linspace(noise_min, noise_max, n_levels)],
            dropout_probs=[0.0],
            n_runs_per_config=n_runs,
        )
        return ScenarioGenerator.generate(space)
