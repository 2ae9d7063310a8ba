#!/usr/bin/env python3
"""
Batch Run Script - Monte Carlo Tracker Tuning

Runs many headless tracking replays in parallel using multiprocessing.
Outputs results to CSV for analysis.

Usage:
    python batch_run.py                    # Run default sweep
    python batch_run.py --configs 100      # Run 100 configurations
    python batch_run.py --compare          # Greedy vs optimal association
    python batch_run.py --output results.csv
"""

import argparse
import csv
import logging
import os
import sys
import time
from datetime import datetime
from multiprocessing import Pool, cpu_count
from typing import List, Optional

from tqdm import tqdm

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from handtrack.simulation.headless_runner import RunConfig, RunResult, run_single_simulation
from handtrack.simulation.scenario_generator import ParameterSpace, ScenarioGenerator
from handtrack.tracking.config import AssociationMethod

logger = logging.getLogger(__name__)


def run_batch(
    configs: List[RunConfig],
    n_workers: Optional[int] = None,
    output_file: str = "output/batch_results.csv",
) -> List[RunResult]:
    """
    Run batch of tracking replays in parallel.

    Args:
        configs: List of run configurations
        n_workers: Number of parallel workers (default: CPU count - 1)
        output_file: Output CSV file path

    Returns:
        List of run results
    """
    if n_workers is None:
        n_workers = max(1, cpu_count() - 1)

    print("=" * 60)
    print("HandTrack Batch Processor")
    print("=" * 60)
    print(f"Configurations: {len(configs)}")
    print(f"Workers: {n_workers}")
    print(f"Output: {output_file}")
    print("=" * 60)

    start_time = time.perf_counter()

    output_dir = os.path.dirname(output_file)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    results = []
    with Pool(n_workers) as pool:
        iterator = pool.imap_unordered(run_single_simulation, configs)
        for result in tqdm(iterator, total=len(configs), desc="Replaying"):
            results.append(result)

    total_time = time.perf_counter() - start_time

    _save_results_csv(results, output_file)
    _print_summary(results, total_time)

    return results


def _save_results_csv(results: List[RunResult], filepath: str) -> None:
    """Save results to CSV file."""
    if not results:
        return

    fieldnames = list(results[0].to_dict().keys())

    with open(filepath, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()

        for result in results:
            writer.writerow(result.to_dict())

    logger.info("Results saved to %s", filepath)
    print(f"\nResults saved to: {filepath}")


def _print_summary(results: List[RunResult], total_time: float) -> None:
    """Print batch run summary."""
    if not results:
        print("No results to summarize")
        return

    avg_created = sum(r.tracks_created for r in results) / len(results)
    avg_jitter = sum(r.mean_jitter for r in results) / len(results)
    coverages = [r.coverage for r in results if r.coverage is not None]
    avg_coverage = sum(coverages) / len(coverages) if coverages else 0.0

    print("\n" + "=" * 60)
    print("BATCH COMPLETE")
    print("=" * 60)
    print(f"Total runs: {len(results)}")
    print(f"Average tracks created: {avg_created:.2f}")
    print(f"Average jitter: {avg_jitter:.3f}")
    print(f"Average coverage: {avg_coverage:.3f}")
    print(f"Total time: {total_time:.2f}s")
    print(f"Runs/second: {len(results) / total_time:.1f}")
    print("=" * 60)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run Monte Carlo hand tracking replays")
    parser.add_argument(
        "--configs", type=int, default=None, help="Number of configurations (default: all)"
    )
    parser.add_argument(
        "--runs", type=int, default=5, help="Seeded runs per configuration (default: 5)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of parallel workers (default: CPU count - 1)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output CSV file (default: output/batch_YYYYMMDD_HHMMSS.csv)",
    )
    parser.add_argument("--quick", action="store_true", help="Run quick noise sweep")
    parser.add_argument(
        "--compare", action="store_true", help="Sweep both greedy and optimal association"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.output is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        args.output = f"output/batch_{timestamp}.csv"

    if args.quick:
        print("Running quick jitter vs noise sweep...")
        configs = ScenarioGenerator.quick_sweep(n_runs=args.runs)
    else:
        methods = (
            [AssociationMethod.GREEDY, AssociationMethod.OPTIMAL]
            if args.compare
            else [AssociationMethod.GREEDY]
        )
        space = ParameterSpace(
            noise_stds=[1.0, 3.0, 6.0, 10.0],
            dropout_probs=[0.0, 0.1, 0.3],
            association_methods=methods,
            n_runs_per_config=args.runs,
        )
        configs = ScenarioGenerator.generate(space)

    if args.configs and len(configs) > args.configs:
        configs = configs[: args.configs]

    run_batch(configs=configs, n_workers=args.workers, output_file=args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
