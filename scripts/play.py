"""
Interactive play script for Tetris.

Allows playing manually in the terminal or watching a random player.
"""
import argparse
import os
import sys
import time
from pathlib import Path
from typing import Optional
import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tetris.config import GameConfig, load_config, load_yaml
from tetris.renderer import Renderer
from tetris.session import Command, GameEvent, GameSession
from tetris.storage import InMemoryStore, JsonFileStore
from utils.logger import EventLogger


KEY_COMMANDS = {
    'a': Command.MOVE_LEFT,
    'd': Command.MOVE_RIGHT,
    'w': Command.ROTATE_CW,
    'q': Command.ROTATE_CCW,
    'p': Command.PAUSE_TOGGLE,
}


def clear_screen():
    """Clear the terminal screen."""
    os.system('cls' if os.name == 'nt' else 'clear')


def announce(event: GameEvent) -> None:
    """Stand-in for the audio collaborator: print what would be played."""
    if event in (GameEvent.PAUSED, GameEvent.RESUMED, GameEvent.GAME_OVER):
        print(f"[{event.value}]")


def build_session(args) -> GameSession:
    """Create a session from command-line arguments."""
    config = load_config(args.config) if args.config else GameConfig()
    paths = load_yaml(args.config).get('paths', {}) if args.config else {}

    scores_file = args.scores or paths.get('scores_file')
    store = JsonFileStore(scores_file) if scores_file else InMemoryStore()

    log_dir = args.log_dir or paths.get('log_dir')
    logger = EventLogger(log_dir, "play") if log_dir else None

    session = GameSession(config=config, store=store, seed=args.seed, logger=logger)
    if args.difficulty:
        session.set_difficulty(args.difficulty)
    session.add_listener(announce)
    return session


def play_manual(session: GameSession) -> None:
    """
    Play Tetris manually in the terminal.

    Each entered line is a sequence of keys; after applying them the piece
    falls one row ('s' drops one extra row).
    """
    renderer = Renderer()

    print("\n" + "="*60)
    print("TETRIS - Manual Play")
    print("="*60)
    print("\nControls:")
    print("  a/d = left/right, q/w = rotate ccw/cw, s = soft drop, p = pause")
    print("  Keys can be chained, e.g. 'aaw'. Empty line just falls.")
    print("  Type 'x' to quit")
    input("\nPress Enter to start...")
    session.resume()

    while True:
        clear_screen()
        print(renderer.render(session.snapshot()))

        try:
            line = input("\n> ").strip().lower()
        except EOFError:
            break
        if line == 'x':
            break

        extra_drops = 0
        for key in line:
            if key == 's':
                extra_drops += 1
            elif key in KEY_COMMANDS:
                session.handle_input(KEY_COMMANDS[key])

        if session.paused:
            continue

        for _ in range(extra_drops + 1):
            result = session.drop()
            if result.rows_cleared:
                print(f"\n*** Cleared {result.rows_cleared} rows! +{result.score_gained} points ***")
                time.sleep(0.5)
            if result.game_over:
                clear_screen()
                print(renderer.render(session.snapshot()))
                print("\nGAME OVER! Press p to play again.")
                break

    print(f"\nFinal Score: {session.score} | High Score: {session.high_score}")


def watch_random(
    session: GameSession,
    fps: float = 20.0,
    max_seconds: Optional[float] = None,
) -> None:
    """
    Watch a random player, with gravity driven by the wall clock.

    Args:
        session: Session to drive
        fps: Frames per second
        max_seconds: Stop after this long (runs until game over if None)
    """
    renderer = Renderer()
    rng = np.random.default_rng()
    commands = [Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.ROTATE_CW, Command.ROTATE_CCW]

    session.resume()
    start = time.monotonic()

    while not session.is_game_over():
        now = time.monotonic()
        if max_seconds is not None and now - start > max_seconds:
            break

        if rng.random() < 0.3:
            session.handle_input(commands[rng.integers(len(commands))])
        session.update(now * 1000.0)

        clear_screen()
        print(renderer.render(session.snapshot()))
        time.sleep(1.0 / fps)

    print(f"\nFinal Score: {session.score} | High Score: {session.high_score}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Play Tetris")
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Watch a random player instead of playing"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML config (e.g. config/default.yaml)"
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        choices=["easy", "normal", "hard"],
        default=None,
        help="Difficulty tier"
    )
    parser.add_argument(
        "--scores",
        type=str,
        default=None,
        help="JSON file for high scores"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Directory for the event log"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed"
    )
    parser.add_argument(
        "--fps",
        type=float,
        default=20.0,
        help="Frames per second in watch mode"
    )
    parser.add_argument(
        "--seconds",
        type=float,
        default=None,
        help="Time limit in watch mode"
    )

    args = parser.parse_args()
    session = build_session(args)

    if args.watch:
        watch_random(session, fps=args.fps, max_seconds=args.seconds)
    else:
        play_manual(session)

    if session.logger is not None:
        session.logger.save_summary()


if __name__ == "__main__":
    main()
