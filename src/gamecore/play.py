#!/usr/bin/env python
"""Play Dice Race from the terminal.

Usage:
    gamecore-demo                          # 3 players, random seed
    gamecore-demo --seed 42 --players 4    # Reproducible game
    gamecore-demo --watch                  # Print every event as it happens
    gamecore-demo --games 500              # Run many games and report winners
    gamecore-demo --save-log race.yaml     # Save the event log as YAML
"""

import argparse
import logging
import random
from collections import Counter
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from gamecore.engine import GameStatus
from gamecore.events import EventFormatter, GameAction
from gamecore.games import DiceRaceConfig, DiceRaceGame, create_players
from gamecore.games.dice_race import DEFAULT_TARGET_SCORE, MAX_GAME_ROUNDS

PLAYER_NAMES = ["Alice", "Bob", "Carol", "Dave", "Erin", "Frank"]


class ConsoleListener:
    """Prints each dispatched action on a rich console."""

    def __init__(self, console: Console, formatter: EventFormatter):
        self.console = console
        self.formatter = formatter

    def on_game_event(self, action: GameAction) -> None:
        self.console.print(f"[dim]{action.timestamp:%H:%M:%S}[/dim] {self.formatter.format(action)}")


def build_game(seed: int, config: DiceRaceConfig, player_count: int) -> DiceRaceGame:
    game = DiceRaceGame(f"race-{seed}", config=config, seed=seed)
    for player in create_players(PLAYER_NAMES[:player_count]):
        game.add_player(player)
    return game


def run_game(
    seed: int,
    config: DiceRaceConfig,
    player_count: int,
    watch: bool = False,
    log_file: Optional[str] = None,
) -> Optional[str]:
    """Play one game to the end and print the result.

    Returns:
        Name of the winner, or None if nobody won.
    """
    console = Console()
    game = build_game(seed, config, player_count)

    if watch:
        console.print(f"\n[bold cyan]Watching Dice Race (seed {seed})...[/bold cyan]\n")
        game.dispatcher.subscribe(ConsoleListener(console, EventFormatter(game.player_names)))
    else:
        console.print(f"\n[bold]Running Dice Race (seed {seed})...[/bold]\n")

    game.start_game()
    while game.state.status == GameStatus.IN_PROGRESS:
        game.roll()

    table = Table(title="Scores")
    table.add_column("Player")
    table.add_column("Score", justify="right")
    table.add_column("Status")
    for player in game.players:
        table.add_row(player.name, str(player.score), player.status.value)
    console.print(table)

    winner = game.winner
    console.print(Panel(
        f"[bold]Game Over[/bold]\n\n"
        f"Winner: {winner.name if winner else 'nobody'}\n"
        f"Rounds: {game.state.current_round}, turns: {game.turn_manager.current_turn_number}",
        title="Result"
    ))

    if log_file:
        try:
            game.dispatcher.export_log(game.game_id, game.player_names).save_to_file(log_file)
            console.print(f"Event log saved to {log_file}")
        except OSError as e:
            console.print(f"[red]Failed to save log: {e}[/red]")

    return winner.name if winner else None


def run_stress_test(num_games: int, config: DiceRaceConfig, player_count: int, seed_base: int) -> None:
    """Run many games silently and report who won how often."""
    console = Console()
    console.print(f"\n[bold]Running stress test: {num_games} games...[/bold]")
    console.print(f"Seed base: {seed_base}")
    console.print("-" * 50)

    winners: Counter = Counter()
    turns: list[int] = []
    for game_num in range(num_games):
        game = build_game(seed_base + game_num, config, player_count)
        game.start_game()
        while game.state.status == GameStatus.IN_PROGRESS:
            game.roll()
        winner = game.winner
        winners[winner.name if winner else "nobody"] += 1
        turns.append(game.turn_manager.current_turn_number)

    for name, count in winners.most_common():
        console.print(f"  {name}: {count} ({count / num_games:.1%})")
    console.print(f"Average turns per game: {sum(turns) / len(turns):.1f}")
    console.print("=" * 50)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Dice Race - a turn-based demo game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible games"
    )
    parser.add_argument(
        "--players",
        type=int,
        default=3,
        help=f"Number of players, 2-{len(PLAYER_NAMES)} (default: 3)"
    )
    parser.add_argument(
        "--target",
        type=int,
        default=DEFAULT_TARGET_SCORE,
        help=f"Score needed to win (default: {DEFAULT_TARGET_SCORE})"
    )
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=MAX_GAME_ROUNDS,
        help=f"Round limit (default: {MAX_GAME_ROUNDS})"
    )
    parser.add_argument(
        "--shuffle",
        action="store_true",
        help="Shuffle the turn order before the first turn"
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Print every event as it is dispatched"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=None,
        help="Run N games silently and report statistics"
    )
    parser.add_argument(
        "--save-log",
        dest="log_file",
        default=None,
        help="Save the event log to this YAML file"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    if not 2 <= args.players <= len(PLAYER_NAMES):
        print(f"Error: --players must be between 2 and {len(PLAYER_NAMES)}")
        return 1
    if args.games is not None and args.games < 1:
        print("Error: --games must be a positive integer")
        return 1
    if args.target < 1:
        print("Error: --target must be a positive integer")
        return 1
    if args.max_rounds < 1:
        print("Error: --max-rounds must be a positive integer")
        return 1

    if args.seed is None:
        args.seed = random.randint(1, 1000000)

    config = DiceRaceConfig(
        target_score=args.target,
        max_rounds=args.max_rounds,
        max_players=len(PLAYER_NAMES),
        shuffle_order=args.shuffle,
    )

    if args.games is not None:
        run_stress_test(args.games, config, args.players, seed_base=args.seed)
    else:
        run_game(args.seed, config, args.players, watch=args.watch, log_file=args.log_file)

    return 0


if __name__ == "__main__":
    exit(main())
