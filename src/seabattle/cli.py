"""Command-line driver for a single-player game of sea battle."""

from __future__ import annotations

import argparse

from seabattle.engine.board import BOARD_SIZE
from seabattle.engine.game import ShotReport, SoloGame
from seabattle.engine.ship import Coordinate
from seabattle.telemetry import configure_console_logging, init_telemetry

QUIT_COMMANDS = {"q", "quit"}


def _read_index(prompt: str) -> int:
    raw = input(prompt).strip().lower()
    if raw in QUIT_COMMANDS:
        raise SystemExit("Goodbye!")
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{raw!r} is not a number.") from exc
    if not 0 <= value < BOARD_SIZE:
        raise ValueError(f"{value} is outside 0-{BOARD_SIZE - 1}.")
    return value


def _prompt_for_coordinate() -> Coordinate:
    while True:
        try:
            row = _read_index(f"Enter row (0-{BOARD_SIZE - 1}): ")
            col = _read_index(f"Enter column (0-{BOARD_SIZE - 1}): ")
        except ValueError:
            print("Invalid coordinates. Please try again.")
            continue
        return Coordinate(row, col)


def _describe_shot(report: ShotReport) -> list[str]:
    lines = ["You hit a ship!" if report.hit else "You missed."]
    if report.sunk_type is not None:
        lines.append(f"You sank a {report.sunk_type.type_name}!")
    return lines


def play_game(seed: int | None = None) -> SoloGame:
    game = SoloGame(rng_seed=seed)
    game.setup_random()
    print("Welcome to Battleship!")

    while not game.board.is_complete():
        state = game.get_state()
        print()
        print(game.render(), end="")
        print(f"Shots fired: {state.shots_fired}")
        print(f"Ships sunk: {state.ships_sunk}")

        report = game.fire(_prompt_for_coordinate())
        for line in _describe_shot(report):
            print(line)

    print()
    print(game.render(), end="")
    print("Congratulations! You've sunk all the ships!")
    print(f"Total shots fired: {game.board.shots_fired}")
    return game


def main() -> None:
    parser = argparse.ArgumentParser(description="Sink a hidden fleet on a 10x10 ocean.")
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for reproducible fleets."
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level for engine events (default: WARNING)."
    )
    args = parser.parse_args()
    configure_console_logging(args.log_level.upper())
    init_telemetry()
    play_game(seed=args.seed)


if __name__ == "__main__":
    main()
