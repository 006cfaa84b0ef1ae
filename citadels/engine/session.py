"""The game session: every piece of mutable state, in one place."""

import random
from dataclasses import dataclass, field
from typing import Optional

from ..agents.player import HUMAN_PLAYER_ID, Player
from ..communication.channels import ChannelManager
from ..communication.markdown_logger import MarkdownLogger
from .cards import DistrictDeck
from .errors import InvalidIndex
from .phases import PhaseManager, PhaseState
from .roles import Role, all_roles
from .scoring import ScoreReport


@dataclass
class SelectionRound:
    """Where each role is during one round of selection.

    Every role is in exactly one of: the pool, the mystery slot, the face-up
    discards, or the assignments.
    """
    pool: list[Role] = field(default_factory=all_roles)
    mystery: Optional[Role] = None
    face_up: list[Role] = field(default_factory=list)
    assignments: dict[int, Role] = field(default_factory=dict)
    discards_made: bool = False

    def reset(self) -> None:
        """Put every role back in the pool for a new round."""
        self.pool = all_roles()
        self.mystery = None
        self.face_up = []
        self.assignments = {}
        self.discards_made = False

    def owner_of(self, role: Role) -> Optional[int]:
        """Id of the player holding a role this round."""
        for player_id, held in self.assignments.items():
            if held == role:
                return player_id
        return None

    def accounted_roles(self) -> list[Role]:
        """Every role, wherever it currently sits."""
        roles = list(self.pool) + list(self.face_up) + list(self.assignments.values())
        if self.mystery is not None:
            roles.append(self.mystery)
        return roles


@dataclass
class GameSession:
    """Players, deck and sequencing state shared by the engine components."""

    players: list[Player]
    deck: DistrictDeck
    rng: random.Random = field(default_factory=random.Random)
    phases: PhaseManager = field(default_factory=PhaseManager)
    selection: SelectionRound = field(default_factory=SelectionRound)
    channels: ChannelManager = field(default_factory=ChannelManager)
    logger: MarkdownLogger = field(default_factory=MarkdownLogger)
    final_report: Optional[ScoreReport] = None

    @property
    def state(self) -> PhaseState:
        return self.phases.state

    @property
    def human(self) -> Player:
        return self.player_by_id(HUMAN_PLAYER_ID)

    @property
    def current_player(self) -> Optional[Player]:
        if self.state.current_player_id is None:
            return None
        return self.player_by_id(self.state.current_player_id)

    @property
    def chooser(self) -> Player:
        return self.players[self.state.chooser_index]

    def player_by_id(self, player_id: int) -> Player:
        for player in self.players:
            if player.id == player_id:
                return player
        raise InvalidIndex(f"Invalid player number. Must be 1-{len(self.players)}.")

    def owner_of(self, role: Role) -> Optional[Player]:
        player_id = self.selection.owner_of(role)
        return None if player_id is None else self.player_by_id(player_id)

    def role_of(self, player: Player) -> Optional[Role]:
        return self.selection.assignments.get(player.id)

    def announce(self, content: str) -> None:
        self.channels.announce(content, self.state.phase_name)

    def tell_human(self, content: str) -> None:
        self.channels.tell_human(content, self.state.phase_name)

    def reveal(self, content: str) -> None:
        self.channels.reveal(content, self.state.phase_name)
