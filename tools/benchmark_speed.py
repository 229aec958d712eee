"""
Performance Benchmark
=====================

Measures headless tick throughput for the raw game and the Gym wrapper.

Usage:
    python -m tools.benchmark_speed [--steps S] [--quick]
"""

from __future__ import annotations

import argparse
import sys
import time
import numpy as np

from lane_racer.racer_core.config_loader import load_config
from lane_racer.racer_core.game import CoreGame
from lane_racer.racer_core.env_gym import RacerEnv
from contestants.baseline_dodger.agent import create_agent


def benchmark_core_game(
    num_ticks: int = 10000,
    seed: int = 42
) -> dict:
    """
    Benchmark raw CoreGame without Gym overhead.

    Args:
        num_ticks: Number of ticks.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    game = CoreGame(config=config, seed=seed)
    rng = np.random.default_rng(seed)

    game.reset(seed=seed)
    games = 1
    start = time.perf_counter()

    for _ in range(num_ticks):
        move = int(rng.integers(-1, 2))
        if move:
            game.move_player(move)
        game.update()
        if game.is_over:
            game.reset()
            games += 1

    elapsed = time.perf_counter() - start

    return {
        "mode": "core_game",
        "num_ticks": num_ticks,
        "games": games,
        "elapsed_seconds": elapsed,
        "ticks_per_second": num_ticks / elapsed,
        "ms_per_tick": (elapsed * 1000) / num_ticks
    }


def benchmark_env(
    num_ticks: int = 10000,
    seed: int = 42,
    image_obs: bool = False
) -> dict:
    """
    Benchmark RacerEnv driven by the baseline dodger agent.

    Args:
        num_ticks: Number of steps.
        seed: Random seed.
        image_obs: Include rendered frames in observations.

    Returns:
        Dict with timing and score results.
    """
    env = RacerEnv(image_obs=image_obs)
    agent = create_agent()

    obs, info = env.reset(seed=seed)
    agent.reset()
    scores = []
    start = time.perf_counter()

    for _ in range(num_ticks):
        obs, _, terminated, truncated, info = env.step(agent.act(obs))
        if terminated or truncated:
            scores.append(info["score"])
            obs, info = env.reset()
            agent.reset()

    elapsed = time.perf_counter() - start
    env.close()

    return {
        "mode": "env_image" if image_obs else "env",
        "num_ticks": num_ticks,
        "games": len(scores) + 1,
        "mean_score": float(np.mean(scores)) if scores else float(info["score"]),
        "elapsed_seconds": elapsed,
        "ticks_per_second": num_ticks / elapsed,
        "ms_per_tick": (elapsed * 1000) / num_ticks
    }


def run_all_benchmarks(steps: int = 10000) -> list:
    """Run all benchmarks and print a summary."""
    results = []

    print("=" * 60)
    print("LANE RACER PERFORMANCE BENCHMARK")
    print("=" * 60)
    print()

    print("Benchmarking CoreGame (raw, random moves)...")
    results.append(benchmark_core_game(num_ticks=steps))

    print("Benchmarking RacerEnv (baseline dodger)...")
    results.append(benchmark_env(num_ticks=steps))

    print("Benchmarking RacerEnv with image observations...")
    results.append(benchmark_env(num_ticks=max(1, steps // 10), image_obs=True))

    print()
    print(f"{'Mode':<12} {'Ticks':>8} {'Games':>6} {'Ticks/s':>12} {'ms/tick':>10}")
    print("-" * 52)
    for r in results:
        print(f"{r['mode']:<12} {r['num_ticks']:>8} {r['games']:>6} "
              f"{r['ticks_per_second']:>12.1f} {r['ms_per_tick']:>10.4f}")

    for r in results:
        if "mean_score" in r:
            print(f"{r['mode']}: mean score {r['mean_score']:.0f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark lane racer performance")
    parser.add_argument("--steps", type=int, default=10000, help="Ticks per benchmark")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer ticks)")

    args = parser.parse_args()

    steps = 1000 if args.quick else args.steps
    run_all_benchmarks(steps=steps)

    return 0


if __name__ == "__main__":
    sys.exit(main())
