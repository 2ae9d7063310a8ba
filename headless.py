#!/usr/bin/env python3
"""
Headless Tracking CLI

Replay a detection stream through the hand tracker without a display.

Usage:
    python headless.py                                  # Default synthetic run
    python headless.py --noise 6 --dropout 0.2          # Noisier stream
    python headless.py --config scenarios/two_hands_crossing.yaml

Examples:
    # Compare assignment strategies on the same seed
    python headless.py --seed 3 --association greedy
    python headless.py --seed 3 --association optimal

    # Keep the per-tick tracks
    python headless.py --export output/tracks.csv --record output
"""

import argparse
import logging
import os
import sys

import yaml

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from handtrack.io.exporter import export_history_to_csv
from handtrack.io.scenario_loader import ScenarioLoader
from handtrack.simulation.headless_runner import HeadlessRunner, RunConfig
from handtrack.simulation.synthetic import SyntheticScenario, default_hands
from handtrack.tracking.config import AssociationMethod, TrackerConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run headless hand tracking replay")

    # Config file
    parser.add_argument("--config", type=str, default=None, help="YAML scenario file")

    # Synthetic stream parameters
    parser.add_argument("--ticks", type=int, default=300, help="Number of ticks (default: 300)")
    parser.add_argument(
        "--noise", type=float, default=3.0, help="Detection noise std dev (default: 3.0)"
    )
    parser.add_argument(
        "--dropout", type=float, default=0.0, help="Per-tick dropout probability (default: 0)"
    )
    parser.add_argument(
        "--side-flip", type=float, default=0.0, help="Side label flip probability (default: 0)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")

    # Tracker parameters
    parser.add_argument(
        "--association",
        choices=[m.value for m in AssociationMethod],
        default=AssociationMethod.GREEDY.value,
        help="Assignment strategy (default: greedy)",
    )

    # Outputs
    parser.add_argument("--export", type=str, default=None, help="Write per-tick tracks to CSV")
    parser.add_argument("--record", type=str, default=None, help="Record HDF5 session to directory")

    # Options
    parser.add_argument("--quiet", action="store_true", help="Suppress output")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    keep_history = args.export is not None

    recorder = None
    if args.record:
        from handtrack.simulation.recorder import SessionRecorder

        recorder = SessionRecorder(output_dir=args.record)

    # Load config
    if args.config:
        try:
            loader = ScenarioLoader(args.config)
        except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
            print(f"Error: {e}")
            return 1
        runner = loader.create_runner(keep_history=keep_history, recorder=recorder)
    else:
        try:
            tracker_config = TrackerConfig(association=AssociationMethod(args.association))
        except ValueError as e:
            print(f"Error: {e}")
            return 1
        scenario = SyntheticScenario(
            hands=default_hands(),
            n_ticks=args.ticks,
            noise_std=args.noise,
            dropout_prob=args.dropout,
            side_flip_prob=args.side_flip,
            seed=args.seed,
        )
        runner = HeadlessRunner(
            RunConfig(
                name="synthetic",
                tracker=tracker_config,
                scenario=scenario,
                keep_history=keep_history,
            ),
            recorder=recorder,
        )

    config = runner.config
    if not args.quiet:
        print("=" * 60)
        print("HandTrack Headless Mode")
        print("=" * 60)
        print(f"Scenario: {config.name}")
        print(f"Association: {config.tracker.association.value}")
        if config.scenario is not None:
            print(f"Ticks: {config.scenario.n_ticks}")
            print(f"Hands: {len(config.scenario.hands)}")
            print(f"Noise std: {config.scenario.noise_std:.1f}")
            print(f"Dropout: {config.scenario.dropout_prob:.2f}")
        else:
            print(f"Ticks: {len(config.frames)} (scripted)")
        print("=" * 60)

    if recorder is not None:
        recorder.start_recording(config.tracker.to_dict())

    result = runner.run()

    if recorder is not None:
        session_path = recorder.stop_recording()
        if session_path and not args.quiet:
            print(f"Session recorded to: {session_path}")

    if args.export:
        export_history_to_csv(result.history, args.export)
        if not args.quiet:
            print(f"Tracks exported to: {args.export}")

    if not args.quiet:
        print("\n--- RESULTS ---")
        print(f"Detections: {result.n_detections:,}")
        print(f"Tracks created: {result.tracks_created}")
        print(f"Tracks evicted: {result.tracks_evicted}")
        print(f"Peak live tracks: {result.peak_tracks}")
        print(f"Mean jitter: {result.mean_jitter:.3f}")
        if result.mean_error is not None:
            print(f"Mean position error: {result.mean_error:.2f}")
        if result.coverage is not None:
            print(f"Coverage: {result.coverage:.3f}")
        print(f"Runtime: {result.runtime_s * 1000:.1f} ms")
        print("=" * 60)
    else:
        # Machine-readable output
        print(f"{result.tracks_created} {result.mean_jitter:.4f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
