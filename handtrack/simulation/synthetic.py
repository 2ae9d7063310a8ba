"""
Synthetic Hand Trajectories

Generates detection streams with known ground truth for replay, tuning and
tests. Every random draw goes through one ``numpy.random.Generator`` seeded
by the scenario, so a scenario with a seed always yields the same frames.

Hand motion (per tick t, relative to start_tick):
    x = x0 + vx * t
    y = y0 + vy * t + amplitude * sin(2*pi*t / period)

Measurement model:
    detection = truth + N(0, noise_std^2) per axis
    dropped with probability dropout_prob, or inside a scheduled dropout
    side label flipped with probability side_flip_prob
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from handtrack.tracking.track import Detection, Side


@dataclass
class HandPath:
    """
    Ground-truth path of one hand.

    Attributes:
        side: True handedness
        start: Position at start_tick (x, y)
        velocity: Per-tick drift (vx, vy)
        amplitude: Vertical wave amplitude
        period: Wave period in ticks
        start_tick: First tick the hand is in view
        end_tick: Tick the hand leaves view (exclusive, None = never)
        dropouts: Scheduled (start, end) tick windows with no detection
    """

    side: Side
    start: Tuple[float, float]
    velocity: Tuple[float, float] = (0.0, 0.0)
    amplitude: float = 0.0
    period: float = 60.0
    start_tick: int = 0
    end_tick: Optional[int] = None
    dropouts: List[Tuple[int, int]] = field(default_factory=list)

    def in_view(self, t: int) -> bool:
        return t >= self.start_tick and (self.end_tick is None or t < self.end_tick)

    def in_dropout(self, t: int) -> bool:
        return any(start <= t < end for start, end in self.dropouts)

    def position_at(self, t: int) -> Tuple[float, float]:
        """Ground-truth position at tick t."""
        k = t - self.start_tick
        x = self.start[0] + self.velocity[0] * k
        y = self.start[1] + self.velocity[1] * k
        if self.amplitude:
            y += self.amplitude * np.sin(2.0 * np.pi * k / self.period)
        return (float(x), float(y))


@dataclass
class SyntheticScenario:
    """
    Synthetic detection stream definition.

    Attributes:
        hands: Ground-truth hand paths
        n_ticks: Number of ticks to generate
        noise_std: Measurement noise standard deviation per axis
        dropout_prob: Per-tick probability a visible hand is not detected
        side_flip_prob: Per-detection probability of a wrong side label
        shuffle: Randomize detection order within a tick
        seed: Random seed for reproducibility
    """

    hands: List[HandPath] = field(default_factory=list)
    n_ticks: int = 300
    noise_std: float = 3.0
    dropout_prob: float = 0.0
    side_flip_prob: float = 0.0
    shuffle: bool = True
    seed: Optional[int] = None


@dataclass
class SyntheticFrames:
    """
    Generated detection stream.

    Attributes:
        detections: Per-tick detection lists
        truth: Per-tick list of (hand index, x, y) for hands in view
    """

    detections: List[List[Detection]]
    truth: List[List[Tuple[int, float, float]]]

    def __len__(self) -> int:
        return len(self.detections)


def default_hands() -> List[HandPath]:
    """Two hands sweeping across the canvas and crossing mid-way."""
    return [
        HandPath(side=Side.LEFT, start=(300.0, 360.0), velocity=(3.0, 0.0), amplitude=40.0),
        HandPath(side=Side.RIGHT, start=(980.0, 360.0), velocity=(-3.0, 0.0), amplitude=40.0),
    ]


def generate_frames(scenario: SyntheticScenario) -> SyntheticFrames:
    """
    Generate a detection stream from a scenario.

    Args:
        scenario: Scenario definition

    Returns:
        SyntheticFrames with detections and ground truth
    """
    rng = np.random.default_rng(scenario.seed)
    detections: List[List[Detection]] = []
    truth: List[List[Tuple[int, float, float]]] = []

    for t in range(scenario.n_ticks):
        tick_dets: List[Detection] = []
        tick_truth: List[Tuple[int, float, float]] = []

        for idx, hand in enumerate(scenario.hands):
            if not hand.in_view(t):
                continue
            x, y = hand.position_at(t)
            tick_truth.append((idx, x, y))

            # Same number of draws per visible hand and tick, dropped or not
            noise = rng.normal(0.0, scenario.noise_std, size=2)
            dropped = rng.random() < scenario.dropout_prob
            flipped = rng.random() < scenario.side_flip_prob

            if dropped or hand.in_dropout(t):
                continue
            side = hand.side.opposite if flipped else hand.side
            tick_dets.append(Detection(x=x + float(noise[0]), y=y + float(noise[1]), side=side))

        if scenario.shuffle and len(tick_dets) > 1:
            order = rng.permutation(len(tick_dets))
            tick_dets = [tick_dets[i] for i in order]

        detections.append(tick_dets)
        truth.append(tick_truth)

    return SyntheticFrames(detections=detections, truth=truth)
