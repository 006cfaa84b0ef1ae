"""Rank-ordered turns: income, building and the end of the round."""

from typing import Callable, Sequence

from ..agents.player import Player
from .cards import Card
from .errors import InvalidIndex, PreconditionViolation
from .phases import GamePhase
from .roles import role_for_rank
from .scoring import has_completed_city, rank_scores
from .session import GameSession

GOLD_INCOME = 2
CARDS_DRAWN_FOR_INCOME = 2

KeepChoice = Callable[[Sequence[Card]], int]


class TurnScheduler:
    """Plays one rank per step and enforces the per-turn rules.

    The income and build methods are shared by both kinds of participant:
    automated players call them from inside `step`, the human calls them
    through the game between steps.
    """

    def __init__(self, session: GameSession):
        self.session = session

    def step(self) -> None:
        """Play the next rank, or close the round once all ranks have acted."""
        session = self.session
        state = session.state

        if state.ranks_exhausted:
            if state.end_triggered:
                self.finish_game()
            else:
                self.start_next_round()
            return

        role = role_for_rank(state.rank_pointer)
        owner = session.owner_of(role)
        session.phases.begin_rank(owner.id if owner else None)

        if owner is None:
            session.announce(f"{state.rank_pointer}: {role.name}  No one is the {role.name}")
            session.logger.log_action(None, f"no one is the {role.name}")
        elif owner.participant.interactive:
            session.announce(f"{state.rank_pointer}: {role.name}  Your turn.")
            session.tell_human("Choose income: 'income gold' or 'income cards'")
        else:
            session.announce(f"{state.rank_pointer}: {role.name}  Player {owner.id} is the {role.name}")
            session.reveal(
                f"AI hand: {', '.join(card.display() for card in owner.hand) or '(empty)'}"
            )
            owner.participant.take_income(owner, self)
            owner.participant.build(owner, self)

        session.phases.advance_rank()

    def start_next_round(self) -> None:
        session = self.session
        session.selection.reset()
        session.phases.start_selection()
        session.logger.log_phase_start(session.state.phase_name)

    def finish_game(self) -> None:
        session = self.session
        report = rank_scores(
            session.players,
            session.selection.assignments,
            session.state.first_completer,
        )
        session.final_report = report
        session.phases.end_game()
        session.announce("GAME OVER: Scoring")
        session.announce(
            f"Congratulations, Player {report.winner.player_id} wins with "
            f"{report.winner.total} points!"
        )
        session.logger.log_game_end([s.as_row() for s in report.scores], report.winner.player_id)

    def take_gold_income(self, player: Player) -> None:
        """Take 2 gold as this turn's income."""
        self._check_income(player)
        player.add_gold(GOLD_INCOME)
        self.session.state.income_taken = True
        self._report(player, f"takes {GOLD_INCOME} gold (total={player.gold}).")

    def draw_income(self, player: Player, keep_choice: KeepChoice) -> Card:
        """Draw two cards as this turn's income and keep one of them.

        Args:
            player: The player taking income.
            keep_choice: Given the drawn cards, returns the index of the one to keep.

        Returns:
            The kept card. The other card is discarded for good.
        """
        self._check_income(player)
        deck = self.session.deck
        if deck.is_empty():
            raise PreconditionViolation("The district deck is empty. Take gold instead.")

        drawn = []
        for _ in range(CARDS_DRAWN_FOR_INCOME):
            card = deck.draw()
            if card is not None:
                drawn.append(card)

        choice = keep_choice(drawn)
        if not 0 <= choice < len(drawn):
            deck.return_to_top(drawn)
            raise InvalidIndex(f"Pick a card between 1 and {len(drawn)}.")

        kept = drawn[choice]
        player.add_to_hand(kept)
        self.session.state.income_taken = True
        self._report(player, f"draws income cards, keeps {kept.display()}")
        return kept

    def build(self, player: Player, index: int) -> Card:
        """Build the district at a 0-based hand index.

        Raises:
            PreconditionViolation: Out of turn, before income, or a second build.
            InvalidIndex: The index is outside the hand.
        """
        state = self.session.state
        if not self._is_turn_of(player):
            raise PreconditionViolation("It is not your turn.")
        if not state.income_taken:
            raise PreconditionViolation("You must take income first.")
        if state.built_this_turn:
            raise PreconditionViolation("You have already built this turn.")

        card = player.build_from_hand(index)
        state.built_this_turn = True
        self._report(player, f"builds {card.display()}")
        self.check_completion(player)
        return card

    def check_completion(self, player: Player) -> None:
        """Arm the end of the game the first time any city reaches 8 districts."""
        session = self.session
        if has_completed_city(player) and session.phases.arm_end_trigger(player.id):
            session.announce(f">>> Player {player.id} has completed 8 districts first!")
            session.logger.log_completion(player.id, session.state.phase_name)

    def _check_income(self, player: Player) -> None:
        if not self._is_turn_of(player) or self.session.state.income_taken:
            raise PreconditionViolation("Cannot take income now.")

    def _is_turn_of(self, player: Player) -> bool:
        state = self.session.state
        return state.phase == GamePhase.TURN and state.current_player_id == player.id

    def _report(self, player: Player, action: str) -> None:
        label = "Player" if player.is_human else "AI Player"
        self.session.announce(f"{label} {player.id} {action}")
        self.session.logger.log_action(player.id, action)
