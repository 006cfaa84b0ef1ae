"""Game phase definitions and transitions."""

from enum import Enum
from dataclasses import dataclass
from typing import Optional

# Rank pointer value meaning every rank has been played this round
RANK_EXHAUSTED = 9


class GamePhase(Enum):
    """Phases of a Citadels game."""
    SELECTION = "SELECTION"  # Players pick roles one by one
    TURN = "TURN"            # Roles act in rank order
    GAME_OVER = "GAME_OVER"  # Final scores have been computed


@dataclass
class PhaseState:
    """Sequencing state of the session."""
    phase: GamePhase = GamePhase.SELECTION
    round_number: int = 1
    rank_pointer: int = 1  # Next rank to act (1..8), RANK_EXHAUSTED when done
    chooser_index: int = 0  # Seat that picks the next role
    current_player_id: Optional[int] = None
    income_taken: bool = False
    built_this_turn: bool = False
    end_triggered: bool = False
    first_completer: Optional[int] = None

    @property
    def phase_name(self) -> str:
        """Get a human-readable phase name with round number."""
        if self.phase == GamePhase.SELECTION:
            return f"selection_{self.round_number}"
        elif self.phase == GamePhase.TURN:
            return f"turn_{self.round_number}"
        return self.phase.name.lower()

    @property
    def ranks_exhausted(self) -> bool:
        return self.rank_pointer >= RANK_EXHAUSTED


class PhaseManager:
    """Manages phase transitions and state."""

    def __init__(self, state: Optional[PhaseState] = None):
        self.state = state or PhaseState()

    def start_turns(self) -> PhaseState:
        """All roles are chosen - play them in rank order."""
        self.state.phase = GamePhase.TURN
        self.state.rank_pointer = 1
        self.end_player_turn()
        return self.state

    def start_selection(self) -> PhaseState:
        """Every rank has acted - start the next round."""
        self.state.phase = GamePhase.SELECTION
        self.state.round_number += 1
        self.end_player_turn()
        return self.state

    def end_game(self) -> PhaseState:
        """End the game."""
        self.state.phase = GamePhase.GAME_OVER
        self.end_player_turn()
        return self.state

    def begin_rank(self, player_id: Optional[int]) -> None:
        """Hand the current rank to a player (or nobody) with fresh turn flags."""
        self.state.current_player_id = player_id
        self.state.income_taken = False
        self.state.built_this_turn = False

    def advance_rank(self) -> None:
        self.state.rank_pointer += 1

    def end_player_turn(self) -> None:
        self.begin_rank(None)

    def advance_chooser(self, num_players: int) -> int:
        """Pass the choice of role to the next seat.

        Args:
            num_players: Total number of players.

        Returns:
            The new chooser index.
        """
        self.state.chooser_index = (self.state.chooser_index + 1) % num_players
        return self.state.chooser_index

    def arm_end_trigger(self, player_id: int) -> bool:
        """Record the first player to complete their city.

        Returns:
            True if this call armed the trigger, False if it was already armed.
        """
        if self.state.end_triggered:
            return False
        self.state.end_triggered = True
        self.state.first_completer = player_id
        return True
