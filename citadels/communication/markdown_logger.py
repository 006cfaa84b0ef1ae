"""Markdown logger for game events."""

from datetime import datetime
from pathlib import Path
from typing import Optional


class MarkdownLogger:
    """Writes game events to markdown files.

    Nothing is written until `start_game` has been called.
    """

    def __init__(self, base_dir: str = "games"):
        """Initialize the logger.

        Args:
            base_dir: Base directory for game logs.
        """
        self.base_dir = Path(base_dir)
        self.game_dir: Optional[Path] = None
        self.game_id: Optional[str] = None

    def start_game(self, game_id: Optional[str] = None) -> Path:
        """Start logging a new game.

        Args:
            game_id: Optional game identifier. If not provided, uses timestamp.

        Returns:
            Path to the game directory.
        """
        if game_id is None:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
            game_id = f"game_{timestamp}"

        self.game_id = game_id
        self.game_dir = self.base_dir / game_id
        self.game_dir.mkdir(parents=True, exist_ok=True)

        # Create initial game state file
        self._write_game_header()

        return self.game_dir

    @property
    def active(self) -> bool:
        return self.game_dir is not None

    def _write_game_header(self) -> None:
        """Write the initial game state file header."""
        game_file = self.game_dir / "game_state.md"
        with open(game_file, "w") as f:
            f.write(f"# Citadels Game - {self.game_id}\n\n")
            f.write(f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")
            f.write("---\n\n")

    def _append(self, text: str) -> None:
        if not self.active:
            return
        with open(self.game_dir / "game_state.md", "a") as f:
            f.write(text)

    def log_setup(self, players: list[dict], crowned: int) -> None:
        """Log game setup information.

        Args:
            players: List of player info dicts (id, kind, gold, hand).
            crowned: Id of the player who picks a role first.
        """
        lines = [
            "## Players\n\n",
            "| Player | Kind | Gold | Starting Hand |\n",
            "|--------|------|------|---------------|\n",
        ]
        for p in players:
            lines.append(f"| {p['id']} | {p['kind']} | {p['gold']} | {', '.join(p['hand'])} |\n")
        lines.append(f"\nPlayer {crowned} is the crowned player and picks first.\n\n---\n\n")
        self._append("".join(lines))

    def log_phase_start(self, phase: str) -> None:
        """Log the start of a game phase.

        Args:
            phase: Phase name (e.g., "selection_1", "turn_1").
        """
        self._append(f"## {phase.replace('_', ' ').title()}\n\n")

    def log_selection(
        self,
        phase: str,
        mystery: Optional[str],
        face_up: list[str],
        picks: dict[int, str],
    ) -> None:
        """Log a finished role selection to its own file.

        The file holds hidden information (the mystery discard and every
        pick) and is meant for reviewing the game afterwards.

        Args:
            phase: Selection phase name.
            mystery: The role removed face down, if it stayed out of play.
            face_up: Roles removed face up.
            picks: Mapping of player id to chosen role, in picking order.
        """
        if not self.active:
            return

        filename = f"{phase}.md"
        with open(self.game_dir / filename, "w") as f:
            f.write(f"# Role Selection - {phase.replace('_', ' ').title()}\n\n")
            f.write("*This file records hidden information for game review*\n\n")
            f.write("---\n\n")
            f.write(f"**Mystery discard**: {mystery or 'returned to play'}\n\n")
            f.write(f"**Face-up discards**: {', '.join(face_up) or 'none'}\n\n")
            f.write("| Player | Role |\n")
            f.write("|--------|------|\n")
            for player_id, role in picks.items():
                f.write(f"| {player_id} | {role} |\n")

        self._append(f"*See [{filename}](./{filename}) for the hidden picks*\n\n")

    def log_action(self, player_id: Optional[int], action: str) -> None:
        """Log a single turn action.

        Args:
            player_id: Who acted, or None for a rank nobody holds.
            action: What happened.
        """
        who = f"**Player {player_id}**" if player_id is not None else "*Nobody*"
        self._append(f"- {who}: {action}\n")

    def log_completion(self, player_id: int, phase: str) -> None:
        """Log the first completed city."""
        self._append(
            f"\n### City Completed\n\n"
            f"**Player {player_id}** completed 8 districts first ({phase.replace('_', ' ')}).\n\n"
        )

    def log_game_end(self, scores: list[dict], winner: int) -> None:
        """Log the game ending.

        Args:
            scores: Ranked score rows (player, role, base, diversity, completion, total).
            winner: Winning player id.
        """
        lines = [
            "---\n\n",
            "# GAME OVER\n\n",
            f"## Winner: Player {winner}\n\n",
            "| Player | Role | Base | Diversity | Completion | Total |\n",
            "|--------|------|------|-----------|------------|-------|\n",
        ]
        for s in scores:
            lines.append(
                f"| {s['player']} | {s['role'] or '-'} | {s['base']} | {s['diversity']} "
                f"| {s['completion']} | {s['total']} |\n"
            )
        lines.append(f"\n\nEnded: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        self._append("".join(lines))
