"""Saving and loading games as JSON documents."""

from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from ..agents.participants import AutomatedParticipant, HumanParticipant
from ..agents.player import HUMAN_PLAYER_ID, Player
from .cards import Card, DistrictDeck
from .errors import PersistenceError, UnknownRole
from .phases import RANK_EXHAUSTED, GamePhase, PhaseState
from .roles import Role, all_roles, get_role
from .session import GameSession, SelectionRound


class SavedPlayer(BaseModel):
    """A player as stored on disk. Cards are stored by name only."""
    id: int = Field(ge=1)
    gold: int = Field(ge=0)
    hand: list[str] = Field(default_factory=list)
    city: list[str] = Field(default_factory=list)


class SavedGame(BaseModel):
    """A saved session.

    Only phase, rank pointer, chooser index and the players are required;
    the rest of the session is restored when present.
    """
    phase: Literal["SELECTION", "TURN"]
    rank_pointer: int = Field(ge=1, le=RANK_EXHAUSTED)
    chooser_index: int = Field(ge=0)
    players: list[SavedPlayer] = Field(min_length=1)
    round_number: int = Field(default=1, ge=1)
    current_player: Optional[int] = None
    income_taken: bool = False
    built_this_turn: bool = False
    first_completer: Optional[int] = None
    assignments: dict[int, str] = Field(default_factory=dict)
    mystery: Optional[str] = None
    face_up_discards: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_players(self) -> "SavedGame":
        ids = [p.id for p in self.players]
        if len(set(ids)) != len(ids):
            raise ValueError("player ids must be unique")
        if HUMAN_PLAYER_ID not in ids:
            raise ValueError(f"player {HUMAN_PLAYER_ID} (the human) is missing")
        if self.chooser_index >= len(self.players):
            raise ValueError("chooser_index is out of range")
        for player_id in [self.current_player, self.first_completer, *self.assignments]:
            if player_id is not None and player_id not in ids:
                raise ValueError(f"unknown player id {player_id}")
        if len(self.assignments) > len(self.players):
            raise ValueError("more role assignments than players")
        if self.phase == "SELECTION" and len(self.assignments) == len(self.players):
            raise ValueError("every player already holds a role during selection")
        return self


def snapshot(session: GameSession) -> SavedGame:
    """Capture a session as a saveable document."""
    state = session.state
    if state.phase == GamePhase.GAME_OVER:
        raise PersistenceError("The game is over; there is nothing to save.")

    selection = session.selection
    return SavedGame(
        phase=state.phase.value,
        rank_pointer=state.rank_pointer,
        chooser_index=state.chooser_index,
        players=[
            SavedPlayer(
                id=p.id,
                gold=p.gold,
                hand=[card.name for card in p.hand],
                city=[card.name for card in p.city],
            )
            for p in session.players
        ],
        round_number=state.round_number,
        current_player=state.current_player_id,
        income_taken=state.income_taken,
        built_this_turn=state.built_this_turn,
        first_completer=state.first_completer,
        assignments={pid: role.name for pid, role in selection.assignments.items()},
        mystery=selection.mystery.name if selection.mystery else None,
        face_up_discards=[role.name for role in selection.face_up],
    )


def save_game(session: GameSession, path: Union[str, Path]) -> Path:
    """Write the session to a JSON file.

    Raises:
        PersistenceError: The file could not be written.
    """
    path = Path(path)
    document = snapshot(session)
    try:
        path.write_text(document.model_dump_json(indent=2), encoding="utf-8")
    except OSError as e:
        raise PersistenceError(f"Save failed: {e}") from e
    return path


def read_game(path: Union[str, Path]) -> SavedGame:
    """Read and validate a saved game.

    Raises:
        PersistenceError: The file is unreadable or not a valid save.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PersistenceError(f"Load failed: {e}") from e
    try:
        return SavedGame.model_validate_json(text)
    except ValidationError as e:
        raise PersistenceError(f"Load failed: {e.error_count()} problem(s) in {path}") from e


def _resolve_cards(deck: DistrictDeck, names: list[str]) -> list[Card]:
    cards = []
    for name in names:
        card = deck.card_named(name)
        if card is None:
            raise PersistenceError(f"Load failed: unknown district card '{name}'")
        cards.append(card)
    return cards


def _resolve_role(name: str) -> Role:
    try:
        return get_role(name)
    except UnknownRole as e:
        raise PersistenceError(f"Load failed: {e.message}") from e


def _restore_selection(document: SavedGame) -> SelectionRound:
    assignments = {pid: _resolve_role(name) for pid, name in document.assignments.items()}
    face_up = [_resolve_role(name) for name in document.face_up_discards]
    mystery = _resolve_role(document.mystery) if document.mystery else None

    removed = list(assignments.values()) + face_up + ([mystery] if mystery else [])
    if len(set(removed)) != len(removed):
        raise PersistenceError("Load failed: a role is in more than one place")

    if document.phase == "TURN" or removed:
        pool = [role for role in all_roles() if role not in removed]
        # A fully picked round may have used the mystery role
        discards_made = mystery is not None or bool(face_up) or document.phase == "TURN"
    else:
        pool, discards_made = all_roles(), False

    return SelectionRound(
        pool=pool,
        mystery=mystery,
        face_up=face_up,
        assignments=assignments,
        discards_made=discards_made,
    )


def restore(session: GameSession, document: SavedGame) -> None:
    """Replace the session's players and sequencing state with a saved game.

    Everything is resolved before the session is touched, so a document that
    fails here leaves the session as it was.
    """
    players = []
    for saved in document.players:
        participant = (
            HumanParticipant()
            if saved.id == HUMAN_PLAYER_ID
            else AutomatedParticipant(session.rng)
        )
        players.append(Player(
            id=saved.id,
            participant=participant,
            gold=saved.gold,
            hand=_resolve_cards(session.deck, saved.hand),
            city=_resolve_cards(session.deck, saved.city),
        ))
    selection = _restore_selection(document)
    state = PhaseState(
        phase=GamePhase(document.phase),
        round_number=document.round_number,
        rank_pointer=document.rank_pointer,
        chooser_index=document.chooser_index,
        current_player_id=document.current_player,
        income_taken=document.income_taken,
        built_this_turn=document.built_this_turn,
        end_triggered=document.first_completer is not None,
        first_completer=document.first_completer,
    )

    session.players = players
    session.selection = selection
    session.phases.state = state
    session.final_report = None


def load_game(session: GameSession, path: Union[str, Path]) -> None:
    """Load a saved game into the session."""
    restore(session, read_game(path))
