"""Command loop: reads player commands and drives the game."""

from typing import Optional, Sequence, TextIO

from rich.console import Console
from rich.markup import escape
from rich.prompt import IntPrompt
from rich.table import Table

from .communication.channels import Message, Visibility
from .engine.cards import Card
from .engine.errors import GameError
from .engine.game import Game
from .engine.phases import GamePhase
from .engine.roles import all_role_names

HELP = [
    ("t", "process turns"),
    ("hand", "show your hand and gold"),
    ("gold", "show your gold"),
    ("income gold|cards", "choose income"),
    ("build <hand-index>", "build a district"),
    ("end", "end your turn"),
    ("citadel [p]", "show player p's city"),
    ("list [p]", "alias for citadel"),
    ("city [p]", "alias for citadel"),
    ("all", "show all players info"),
    ("save <file>", "save game state to JSON file"),
    ("load <file>", "load game state from JSON file"),
    ("info <index|role>", "show a card's or a character's ability"),
    ("debug", "toggle debug mode"),
    ("help", "show this message"),
]

MESSAGE_STYLES = {
    Visibility.PUBLIC: "",
    Visibility.PRIVATE: "cyan",
    Visibility.DEBUG: "dim",
}


class CommandProcessor:
    """Parses one line at a time and calls the matching game method."""

    def __init__(self, game: Game, console: Console, stream: Optional[TextIO] = None):
        """Create a processor for the given game.

        Args:
            game: The game instance to drive.
            console: Where output goes.
            stream: Where input comes from. Defaults to standard input.
        """
        self.game = game
        self.console = console
        self.stream = stream

    def run(self) -> None:
        """Read and execute commands until the game is over."""
        self.print_messages()
        while not self.game.is_over:
            try:
                line = self.console.input("> ", stream=self.stream)
            except EOFError:
                break
            # A stream signals end of input with an empty read
            if self.stream is not None and not line:
                break
            self.handle(line)

    def handle(self, line: str) -> None:
        """Execute one command line and print whatever the game announced."""
        line = line.strip()
        if not line:
            self.show_help()
            return
        try:
            self.dispatch(line)
        except GameError as e:
            self.console.print(f"[red]{escape(e.message)}[/red]")
        self.print_messages()

    def dispatch(self, line: str) -> None:
        game = self.game
        if game.current_phase == GamePhase.SELECTION:
            if line.lower() == "t":
                game.advance_step()
            else:
                game.choose_role(line)
            return

        parts = line.split()
        cmd = parts[0].lower()
        human_turn = game.is_human_turn

        if human_turn and cmd == "income" and len(parts) == 2:
            source = parts[1].lower()
            if source == "gold":
                game.take_gold_income()
            elif source == "cards":
                game.draw_income(self.pick_card)
            else:
                self.console.print("Usage: income gold | income cards")
            return

        if cmd == "t":
            game.advance_step()
        elif cmd == "hand":
            if human_turn:
                self.show_hand()
            else:
                self.console.print("It is not your turn.")
        elif cmd == "gold":
            if human_turn:
                self.console.print(f"You have {game.human.gold} gold.")
            else:
                self.console.print("It is not your turn.")
        elif cmd == "build":
            index = self._parse_index(parts) if human_turn else None
            if index is None:
                self.console.print("Usage: build <hand-index>")
            else:
                game.build(index - 1)
        elif cmd == "end":
            if human_turn:
                game.advance_step()
            else:
                self.console.print("It is not your turn.")
        elif cmd in ("citadel", "list", "city"):
            if len(parts) == 1:
                self.show_city(game.human.id)
            elif parts[1].isdigit():
                self.show_city(int(parts[1]))
            else:
                self.console.print(escape(f"Usage: {cmd} [player#]"))
        elif cmd == "all":
            self.show_all()
        elif cmd == "save":
            if len(parts) == 2:
                game.save(parts[1])
            else:
                self.console.print("Usage: save <file>")
        elif cmd == "load":
            if len(parts) == 2:
                game.load(parts[1])
            else:
                self.console.print("Usage: load <file>")
        elif cmd == "debug":
            game.toggle_debug()
        elif cmd == "help":
            self.show_help()
        elif cmd == "info":
            self.show_info(parts)
        else:
            self.console.print("Unknown command.")
            self.show_help()

    def pick_card(self, cards: Sequence[Card]) -> int:
        """Ask the human which drawn card to keep; returns a 0-based index."""
        listing = "   ".join(f"{i}) {card.display()}" for i, card in enumerate(cards, 1))
        self.console.print(f"Drawn: {escape(listing)}")
        pick = IntPrompt.ask(
            "Pick",
            choices=[str(i) for i in range(1, len(cards) + 1)],
            console=self.console,
            stream=self.stream,
        )
        return pick - 1

    def print_messages(self) -> None:
        for message in self.game.messages():
            self.print_message(message)

    def print_message(self, message: Message) -> None:
        style = MESSAGE_STYLES[message.visibility]
        text = escape(message.content)
        self.console.print(f"[{style}]{text}[/{style}]" if style else text)

    def show_hand(self) -> None:
        me = self.game.human
        self.console.print(f"You have {me.gold} gold. Cards in hand:")
        for i, card in enumerate(me.hand, 1):
            self.console.print(
                f"  {i}. {escape(card.name)} ({card.color.value}), cost: {card.cost}"
            )

    def show_city(self, player_id: int) -> None:
        player = self.game.player_by_id(player_id)
        self.console.print(f"Player {player.id} city:")
        if not player.city:
            self.console.print("  (no districts built)")
        for card in player.city:
            self.console.print(f"  {escape(card.display())}")

    def show_all(self) -> None:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Player", style="cyan")
        table.add_column("Hand", justify="right")
        table.add_column("Gold", justify="right", style="yellow")
        table.add_column("City", justify="right", style="green")
        for p in self.game.players:
            table.add_row(str(p.id), f"{p.hand_size} cards", str(p.gold), f"{p.city_size} districts")
        self.console.print(table)

    def show_info(self, parts: list[str]) -> None:
        if len(parts) != 2:
            self.console.print("Usage: info <character-name> OR info <hand-index>")
            return
        arg = parts[1]
        if arg.isdigit():
            if not self.game.is_human_turn:
                self.console.print("It is not your turn.")
                return
            card, text = self.game.card_info(int(arg) - 1)
            if text is None:
                self.console.print("No special ability.")
            else:
                self.console.print(f"Special ability of {escape(card.name)}: {escape(text)}")
            return

        try:
            role = self.game.role_info(arg)
        except GameError:
            self.console.print(
                f"Invalid character name. Try one of: {', '.join(all_role_names())}"
            )
            return
        self.console.print(f"{role.name} ({role.rank}): {escape(role.description)}")

    def show_help(self) -> None:
        self.console.print("Available commands:")
        for command, description in HELP:
            self.console.print(f"  {escape(f'{command:<22}')}: {description}")

    @staticmethod
    def _parse_index(parts: list[str]) -> Optional[int]:
        if len(parts) != 2 or not parts[1].isdigit():
            return None
        return int(parts[1])
