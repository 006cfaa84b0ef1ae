"""Main game engine for Citadels."""

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..agents.participants import AutomatedParticipant, HumanParticipant
from ..agents.player import HUMAN_PLAYER_ID, STARTING_GOLD, Player
from ..communication.channels import Message
from ..communication.markdown_logger import MarkdownLogger
from .cards import Card, Color, DistrictDeck
from .errors import PreconditionViolation
from .persistence import load_game, save_game
from .phases import GamePhase
from .roles import Role, get_role
from .scoring import ScoreReport
from .selection import SelectionCoordinator
from .session import GameSession
from .turns import KeepChoice, TurnScheduler

MIN_PLAYERS = 4
MAX_PLAYERS = 7


@dataclass
class GameConfig:
    """Configuration for a game."""
    player_count: int = 4
    starting_gold: int = STARTING_GOLD
    starting_hand: int = 4
    cards_file: Optional[str] = None
    debug: bool = False


class Game:
    """The Citadels game engine.

    One human (player 1) plays against automated opponents. The command loop
    drives the game with `advance_step` and feeds the human's decisions in
    through the other public methods.
    """

    def __init__(
        self,
        config: GameConfig,
        deck: Optional[DistrictDeck] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[MarkdownLogger] = None,
    ):
        """Initialize the game.

        Args:
            config: Game configuration.
            deck: District deck to play with. Defaults to the configured card list.
            rng: Source of every random decision in the game.
            logger: Optional markdown logger.
        """
        self.config = config
        self.rng = rng or random.Random()
        self.logger = logger or MarkdownLogger()
        if deck is None:
            deck = DistrictDeck.from_tsv(config.cards_file, rng=self.rng)
        self.session = GameSession(players=[], deck=deck, rng=self.rng, logger=self.logger)
        self.selection = SelectionCoordinator(self.session)
        self.turns = TurnScheduler(self.session)
        self.debug = config.debug

    def setup_players(self, player_count: Optional[int] = None) -> None:
        """Seat the players, deal their cards and crown a first chooser.

        Args:
            player_count: Overrides the configured number of players.
        """
        count = player_count or self.config.player_count
        if not MIN_PLAYERS <= count <= MAX_PLAYERS:
            raise ValueError(
                f"Player count must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {count}"
            )

        players = [Player(
            id=HUMAN_PLAYER_ID,
            participant=HumanParticipant(),
            gold=self.config.starting_gold,
        )]
        for player_id in range(HUMAN_PLAYER_ID + 1, count + 1):
            players.append(Player(
                id=player_id,
                participant=AutomatedParticipant(self.rng),
                gold=self.config.starting_gold,
            ))
        self.session.players = players

        for player in players:
            player.draw(self.session.deck, self.config.starting_hand)

        state = self.session.state
        state.chooser_index = self.rng.randrange(count)
        crowned = self.session.chooser.id

        self.session.announce(f"Starting Citadels with {count} players...")
        self.session.tell_human(f"You are player {HUMAN_PLAYER_ID}")
        self.session.announce(f"Player {crowned} is the crowned player and goes first.")
        self.session.tell_human("Press t to process turns")

        self.logger.log_setup(
            players=[{
                "id": p.id,
                "kind": "human" if p.is_human else "automated",
                "gold": p.gold,
                "hand": [card.display() for card in p.hand],
            } for p in players],
            crowned=crowned,
        )
        self.logger.log_phase_start(state.phase_name)

    # --- Driver surface ---

    def advance_step(self) -> None:
        """Advance the game by one step of the current phase."""
        phase = self.current_phase
        if phase == GamePhase.SELECTION:
            self.selection.step()
        elif phase == GamePhase.TURN:
            self.turns.step()
        else:
            raise PreconditionViolation("The game is over.")

    def choose_role(self, name: str) -> Role:
        """The human picks a role during selection."""
        return self.selection.choose_role(name)

    def take_gold_income(self) -> None:
        """The human takes 2 gold as income."""
        self.turns.take_gold_income(self.human)

    def draw_income(self, keep_choice: KeepChoice) -> Card:
        """The human draws two cards as income and keeps one."""
        return self.turns.draw_income(self.human, keep_choice)

    def build(self, index: int) -> Card:
        """The human builds the district at a 0-based hand index."""
        return self.turns.build(self.human, index)

    @property
    def current_phase(self) -> GamePhase:
        return self.session.state.phase

    @property
    def current_player(self) -> Optional[Player]:
        """Player whose rank is being played, if any."""
        return self.session.current_player

    def is_income_taken(self) -> bool:
        return self.session.state.income_taken

    def has_built_this_turn(self) -> bool:
        return self.session.state.built_this_turn

    @property
    def is_human_turn(self) -> bool:
        player = self.current_player
        return self.current_phase == GamePhase.TURN and player is not None and player.is_human

    @property
    def is_over(self) -> bool:
        return self.current_phase == GamePhase.GAME_OVER

    @property
    def final_report(self) -> Optional[ScoreReport]:
        return self.session.final_report

    # --- Information ---

    @property
    def players(self) -> list[Player]:
        return self.session.players

    @property
    def human(self) -> Player:
        return self.session.human

    def player_by_id(self, player_id: int) -> Player:
        return self.session.player_by_id(player_id)

    def available_roles(self) -> list[Role]:
        return self.selection.available_roles()

    def card_info(self, index: int) -> tuple[Card, Optional[str]]:
        """The human's hand card at a 0-based index and its ability text.

        Returns:
            The card, and its text or None for a card without a special ability.
        """
        card = self.human.card_at(index)
        if card.color != Color.PURPLE or not card.text:
            return card, None
        return card, card.text

    def role_info(self, name: str) -> Role:
        return get_role(name)

    def toggle_debug(self) -> bool:
        self.debug = not self.debug
        self.session.announce(f"Debug mode {'ON' if self.debug else 'OFF'}")
        return self.debug

    def messages(self) -> list[Message]:
        """Messages posted since the last call; hidden ones only in debug mode."""
        return self.session.channels.drain(include_debug=self.debug)

    # --- Persistence ---

    def save(self, path: Union[str, Path]) -> Path:
        saved = save_game(self.session, path)
        self.session.announce(f"Game saved to {saved}")
        return saved

    def load(self, path: Union[str, Path]) -> None:
        load_game(self.session, path)
        self.session.announce(f"Game loaded from {path}")
        self.logger.log_phase_start(self.session.state.phase_name)
