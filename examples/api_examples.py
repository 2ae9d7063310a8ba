"""
HandTrack API Examples

Usage examples demonstrating the hand tracking API.
"""

import os
import sys

import numpy as np

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def example_single_tick():
    """
    Example 1: One Tick of the Pure Transform

    Feed detections into an empty store and read the resulting tracks.
    """
    from handtrack.tracking import EMPTY_STORE, Detection, Side, tick

    store = tick(
        EMPTY_STORE,
        [Detection(320.0, 360.0, Side.LEFT), Detection(960.0, 360.0, Side.RIGHT)],
    )

    print("=== Single Tick Example ===")
    for track in store:
        print(f"Track {track.id}: {track.side.value} at ({track.x:.0f}, {track.y:.0f})")
    print(f"Next id: {store.next_id}")
    return store


def example_occlusion():
    """
    Example 2: Coasting Through an Occlusion

    A moving hand disappears for eight frames; the track keeps drifting on
    its damped velocity and starts fading after the grace period.
    """
    from handtrack.tracking import Detection, HandTracker, Side

    tracker = HandTracker()
    for i in range(10):
        tracker.update([Detection(200.0 + 10.0 * i, 300.0, Side.RIGHT)])

    print("\n=== Occlusion Example ===")
    for _ in range(8):
        (track,) = tracker.update([])
        print(
            f"missing={track.frames_missing:2d}  x={track.x:6.1f}  "
            f"vx={track.vx:5.2f}  alpha={track.alpha:.1f}"
        )
    return tracker


def example_landmarks():
    """
    Example 3: Landmark Model Output to Detections

    Convert normalized per-hand landmarks from a mirrored selfie view.
    """
    from handtrack.perception import FrameGate, landmarks_to_detections

    hand = np.full((21, 3), 0.5)
    hand[9] = [0.25, 0.4, 0.0]

    gate = FrameGate()
    detections = []
    for frame_time in (0.0, 0.0, 0.033):
        if gate.accept(frame_time):
            detections = landmarks_to_detections([hand], ["Left"])

    print("\n=== Landmark Example ===")
    for det in detections:
        print(f"{det.side.value} hand at ({det.x:.0f}, {det.y:.0f})")
    return detections


def example_interaction():
    """
    Example 4: Hit Testing and Render Style

    Only tracks matched on at least three ticks can hit targets.
    """
    from handtrack.interaction import find_hit, render_style
    from handtrack.tracking import Detection, HandTracker, Side

    tracker = HandTracker()
    target = ((650.0, 400.0), 40.0)

    print("\n=== Interaction Example ===")
    for i in range(4):
        tracks = tracker.update([Detection(640.0, 380.0, Side.LEFT)])
        hit = find_hit(tracks, *target, config=tracker.config)
        style = render_style(tracks[0])
        print(
            f"tick {i}: frames_detected={tracks[0].frames_detected} "
            f"opacity={style.opacity:.2f} hit={hit is not None}"
        )
    return tracker


def example_compare_association():
    """
    Example 5: Greedy vs Optimal Association

    Replay the same noisy stream with both assignment strategies.
    """
    from handtrack.simulation import (
        HeadlessRunner,
        RunConfig,
        SyntheticScenario,
        default_hands,
    )
    from handtrack.tracking import AssociationMethod, TrackerConfig

    scenario = SyntheticScenario(
        hands=default_hands(), noise_std=6.0, dropout_prob=0.1, side_flip_prob=0.05, seed=3
    )

    print("\n=== Association Comparison ===")
    results = {}
    for method in AssociationMethod:
        config = RunConfig(
            name=method.value,
            tracker=TrackerConfig(association=method),
            scenario=scenario,
        )
        result = HeadlessRunner(config).run()
        results[method] = result
        print(
            f"{method.value:8s} created={result.tracks_created} "
            f"jitter={result.mean_jitter:.2f} coverage={result.coverage:.3f}"
        )
    return results


if __name__ == "__main__":
    print("HandTrack API Examples")
    print("=" * 60)

    example_single_tick()
    example_occlusion()
    example_landmarks()
    example_interaction()
    example_compare_association()

    print("\n" + "=" * 60)
    print("All examples completed successfully!")
