"""
Performance benchmark script for Tetris.

Tests the speed of the game engine and environment.
"""
import argparse
import sys
import time
from pathlib import Path
from typing import Dict, Any
import numpy as np
from tqdm import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from utils.logger import MetricsTracker


def benchmark_engine(num_games: int = 200, seed: int = 42, difficulty: str = "normal") -> Dict[str, Any]:
    """
    Benchmark the game engine with random inputs.

    Args:
        num_games: Number of games to play
        seed: Random seed
        difficulty: Difficulty tier

    Returns:
        Dictionary of benchmark results
    """
    from tetris.session import Command, GameSession

    commands = [Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.ROTATE_CW, Command.ROTATE_CCW]
    rng = np.random.default_rng(seed)
    tracker = MetricsTracker(window_size=num_games)

    total_drops = 0
    total_time = 0.0

    for i in tqdm(range(num_games), desc="Engine"):
        session = GameSession(seed=seed + i)
        session.set_difficulty(difficulty)
        session.resume()

        drops = 0
        rows = 0
        best_score = 0
        start = time.perf_counter()
        while not session.is_game_over():
            session.handle_input(commands[rng.integers(len(commands))])
            result = session.drop()
            best_score = max(best_score, session.score)
            rows += result.rows_cleared
            drops += 1
        total_time += time.perf_counter() - start
        total_drops += drops

        tracker.add('drops', drops)
        tracker.add('rows_cleared', rows)
        tracker.add('score', best_score)

    return {
        'num_games': num_games,
        'total_drops': total_drops,
        'total_time': total_time,
        'drops_per_second': total_drops / total_time,
        'games_per_second': num_games / total_time,
        **{f"{name}_mean": summary['mean'] for name, summary in tracker.get_all_summaries().items()},
        **{f"{name}_max": summary['max'] for name, summary in tracker.get_all_summaries().items()},
    }


def benchmark_environment(num_steps: int = 50000, seed: int = 42) -> Dict[str, Any]:
    """
    Benchmark the Gymnasium environment speed.

    Args:
        num_steps: Number of steps to take
        seed: Random seed

    Returns:
        Dictionary of benchmark results
    """
    from environment.tetris_env import TetrisEnv

    env = TetrisEnv(seed=seed)
    env.action_space.seed(seed)
    obs, _ = env.reset()

    start = time.perf_counter()
    episodes = 0

    for _ in tqdm(range(num_steps), desc="Environment"):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        if terminated or truncated:
            obs, _ = env.reset()
            episodes += 1

    total_time = time.perf_counter() - start
    env.close()

    return {
        'num_steps': num_steps,
        'num_episodes': episodes,
        'total_time': total_time,
        'steps_per_second': num_steps / total_time,
        'avg_episode_length': num_steps / episodes if episodes > 0 else 0,
    }


def print_results(title: str, results: Dict[str, Any]) -> None:
    """Print benchmark results."""
    print(f"\n{'='*60}")
    print(title)
    print('='*60)
    for key, value in results.items():
        if isinstance(value, float):
            print(f"  {key}: {value:,.2f}")
        else:
            print(f"  {key}: {value}")
    print('='*60)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Benchmark Tetris")
    parser.add_argument(
        "--engine",
        action="store_true",
        help="Benchmark game engine"
    )
    parser.add_argument(
        "--env",
        action="store_true",
        help="Benchmark environment"
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Run all benchmarks"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=200,
        help="Number of games for the engine benchmark"
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=50000,
        help="Number of steps for the environment benchmark"
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        choices=["easy", "normal", "hard"],
        default="normal",
        help="Difficulty tier for the engine benchmark"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed"
    )

    args = parser.parse_args()

    if args.all or args.engine:
        results = benchmark_engine(num_games=args.games, seed=args.seed, difficulty=args.difficulty)
        print_results("GAME ENGINE BENCHMARK", results)

    if args.all or args.env:
        results = benchmark_environment(num_steps=args.steps, seed=args.seed)
        print_results("ENVIRONMENT BENCHMARK", results)

    if not any([args.all, args.engine, args.env]):
        print("No benchmark selected. Use --all to run all benchmarks.")
        parser.print_help()


if __name__ == "__main__":
    main()
