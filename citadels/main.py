"""Main entry point for Citadels."""

import os
import sys
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import IntPrompt
from rich.table import Table

from .commands import CommandProcessor
from .communication.markdown_logger import MarkdownLogger
from .engine.game import MAX_PLAYERS, MIN_PLAYERS, Game, GameConfig


# Load environment variables
load_dotenv()

console = Console()

DEFAULT_CONFIG_PATH = "config/game.yaml"


def load_config(config_path: Optional[str] = None) -> dict:
    """Load game configuration from YAML file.

    A missing default config file means "use the defaults"; a missing file
    that was asked for explicitly is an error.

    Raises:
        FileNotFoundError: An explicitly requested file does not exist.
        ValueError: The file is not valid YAML or not a mapping.
    """
    explicit = config_path is not None
    path = Path(config_path or DEFAULT_CONFIG_PATH)
    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return {}

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config file {path}: expected a mapping")
    return data


def _setting(section: dict, key: str, default):
    # An empty key in YAML loads as None
    value = section.get(key)
    return default if value is None else value


def build_game_config(config_data: dict) -> GameConfig:
    """Turn the `game` section of the YAML config into a GameConfig."""
    game_data = config_data.get("game") or {}
    defaults = GameConfig()
    return GameConfig(
        player_count=game_data.get("player_count") or 0,
        starting_gold=_setting(game_data, "starting_gold", defaults.starting_gold),
        starting_hand=_setting(game_data, "starting_hand", defaults.starting_hand),
        cards_file=game_data.get("cards_file"),
        debug=bool(game_data.get("debug", False)),
    )


def ask_player_count() -> int:
    """Prompt until a valid number of players is entered."""
    while True:
        count = IntPrompt.ask(f"Enter how many players [{MIN_PLAYERS}-{MAX_PLAYERS}]", console=console)
        if MIN_PLAYERS <= count <= MAX_PLAYERS:
            return count


def display_welcome():
    """Display welcome message."""
    console.print(Panel.fit(
        "[bold yellow]CITADELS[/bold yellow]\n"
        "[dim]Build the finest city before your rivals do[/dim]",
        border_style="yellow",
    ))
    console.print()


def display_results(game: Game):
    """Display game results."""
    report = game.final_report
    if report is None:
        return

    console.print()
    console.print("[bold]=== GAME OVER: Scoring ===[/bold]")
    table = Table(title="Final Scores", show_header=True, header_style="bold")
    table.add_column("Player", style="cyan")
    table.add_column("Role", style="magenta")
    table.add_column("Base (sum costs)", justify="right")
    table.add_column("Diversity bonus", justify="right")
    table.add_column("Completion bonus", justify="right")
    table.add_column("Total", justify="right", style="green")

    for score in report.scores:
        table.add_row(
            str(score.player_id),
            score.role.name if score.role else "-",
            str(score.base),
            str(score.diversity),
            str(score.completion),
            str(score.total),
        )

    console.print(table)
    console.print()

    winner = report.winner
    console.print(Panel(
        f"[bold green]Congratulations, Player {winner.player_id} wins "
        f"with {winner.total} points![/bold green]",
        border_style="green",
    ))

    # Log location
    if game.logger.game_dir:
        console.print(f"[dim]Game log saved to: {game.logger.game_dir}[/dim]")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    argv = sys.argv[1:] if argv is None else argv
    display_welcome()

    # Load configuration
    config_path = argv[0] if argv else os.getenv("CITADELS_CONFIG")
    try:
        config_data = load_config(config_path)
    except (OSError, ValueError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return 1
    game_config = build_game_config(config_data)

    log_data = config_data.get("logging") or {}
    logger = MarkdownLogger(base_dir=log_data.get("base_dir", "games"))

    try:
        console.print("Shuffling deck...")
        game = Game(config=game_config, logger=logger)
        player_count = game_config.player_count or ask_player_count()
        if log_data.get("enabled", True):
            logger.start_game()
        console.print("Dealing cards...")
        game.setup_players(player_count)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error setting up the game: {escape(str(e))}[/red]")
        return 1

    try:
        CommandProcessor(game, console).run()
    except KeyboardInterrupt:
        console.print("\n[yellow]Game interrupted by user.[/yellow]")
        return 0

    display_results(game)
    return 0


def run():
    """Entry point for the CLI."""
    sys.exit(main())


if __name__ == "__main__":
    run()
