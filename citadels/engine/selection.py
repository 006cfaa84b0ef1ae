"""Role selection: discards, then one role per player in seat order."""

from .errors import PreconditionViolation, RoleUnavailable
from .phases import GamePhase
from .roles import KING, Role, get_role
from .session import GameSession


def face_up_discard_count(num_players: int) -> int:
    """How many roles are removed face up for a table of this size."""
    if num_players in (4, 6):
        return 2
    if num_players in (5, 7):
        return 1
    return 0


class SelectionCoordinator:
    """Runs the selection phase one step at a time."""

    def __init__(self, session: GameSession):
        self.session = session

    @property
    def round(self):
        return self.session.selection

    def available_roles(self) -> list[Role]:
        """Roles the current chooser may take."""
        if not self.round.pool and self.round.mystery is not None:
            return [self.round.mystery]
        return sorted(self.round.pool)

    def step(self) -> None:
        """Perform one selection action.

        The first step of a round makes the discards. After that each step
        lets one automated player pick, or prompts the human when it is
        their pick.
        """
        if not self.round.discards_made:
            self.make_discards()
            return

        chooser = self.session.chooser
        self._release_mystery_if_needed()
        if chooser.participant.interactive:
            self.session.tell_human(f"Available characters: {self._list_available()}")
            self.session.tell_human("Choose your character.")
            return

        role = self._draw_from_pool()
        self.session.reveal(f"Player {chooser.id} chose the {role.name}.")
        self._assign(chooser.id, role)

    def make_discards(self) -> None:
        """Remove the mystery role and the face-up roles for this round."""
        selection = self.round
        selection.mystery = self._draw_from_pool()
        self.session.announce("A mystery character was removed.")
        self.session.reveal(f"The mystery character is the {selection.mystery.name}.")

        remaining = face_up_discard_count(len(self.session.players))
        while remaining > 0:
            role = self._draw_from_pool()
            if role == KING:
                self.session.announce(
                    "King was removed. The King cannot be visibly removed, trying again.."
                )
                selection.pool.append(role)
                self.session.rng.shuffle(selection.pool)
                continue
            selection.face_up.append(role)
            self.session.announce(f"{role.name} was removed.")
            remaining -= 1

        selection.discards_made = True

    def choose_role(self, name: str) -> Role:
        """The human picks a role by name.

        Raises:
            PreconditionViolation: It is not the human's pick.
            UnknownRole: The name is not a role.
            RoleUnavailable: The role has already left the pool.
        """
        session = self.session
        if session.state.phase != GamePhase.SELECTION:
            raise PreconditionViolation("It is not your turn. Press t to continue.")
        role = get_role(name)
        if not self.round.discards_made or not session.chooser.is_human:
            raise PreconditionViolation("It is not your turn to choose. Press t to continue.")
        if role not in self.available_roles():
            raise RoleUnavailable(
                f"That character is not available. Pick one of: {self._list_available()}"
            )

        self._release_mystery_if_needed()
        self.round.pool.remove(role)
        self._assign(session.chooser.id, role)
        return role

    def _assign(self, player_id: int, role: Role) -> None:
        session = self.session
        self.round.assignments[player_id] = role
        session.announce(f"Player {player_id} chose a character.")
        session.phases.advance_chooser(len(session.players))

        if len(self.round.assignments) == len(session.players):
            session.logger.log_selection(
                session.state.phase_name,
                self.round.mystery.name if self.round.mystery else None,
                [r.name for r in self.round.face_up],
                {pid: r.name for pid, r in self.round.assignments.items()},
            )
            session.phases.start_turns()
            session.logger.log_phase_start(session.state.phase_name)

    def _release_mystery_if_needed(self) -> None:
        # Seven players run the pool dry; the last pick may take the mystery role
        if not self.round.pool and self.round.mystery is not None:
            self.round.pool.append(self.round.mystery)
            self.round.mystery = None
            self.session.announce("The mystery character is returned for the last pick.")

    def _draw_from_pool(self) -> Role:
        pool = self.round.pool
        return pool.pop(self.session.rng.randrange(len(pool)))

    def _list_available(self) -> str:
        return ", ".join(role.name for role in self.available_roles())
