"""End-of-game detection and scoring."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .cards import Color
from .roles import Role

if TYPE_CHECKING:
    from ..agents.player import Player

COMPLETION_THRESHOLD = 8
DIVERSITY_BONUS = 3
FIRST_COMPLETION_BONUS = 4
COMPLETION_BONUS = 2


@dataclass(frozen=True)
class PlayerScore:
    """One line of the final report."""
    player_id: int
    base: int
    diversity: int
    completion: int
    role: Optional[Role] = None

    @property
    def total(self) -> int:
        return self.base + self.diversity + self.completion

    def as_row(self) -> dict:
        return {
            "player": self.player_id,
            "role": self.role.name if self.role else None,
            "base": self.base,
            "diversity": self.diversity,
            "completion": self.completion,
            "total": self.total,
        }


@dataclass(frozen=True)
class ScoreReport:
    """Final scores, best first."""
    scores: list[PlayerScore]

    @property
    def winner(self) -> PlayerScore:
        return self.scores[0]


def has_completed_city(player: "Player") -> bool:
    return player.city_size >= COMPLETION_THRESHOLD


def score_player(
    player: "Player",
    first_completer: Optional[int],
    role: Optional[Role] = None,
) -> PlayerScore:
    """Score a single player's city.

    Args:
        player: The player to score.
        first_completer: Id of the first player to reach 8 districts, if any.
        role: The role the player held in the final round.
    """
    base = sum(card.cost for card in player.city)
    diversity = DIVERSITY_BONUS if player.has_colors(Color) else 0

    completion = 0
    if has_completed_city(player):
        completion = FIRST_COMPLETION_BONUS if player.id == first_completer else COMPLETION_BONUS

    return PlayerScore(
        player_id=player.id,
        base=base,
        diversity=diversity,
        completion=completion,
        role=role,
    )


def rank_scores(
    players: list["Player"],
    assignments: dict[int, Role],
    first_completer: Optional[int],
) -> ScoreReport:
    """Score every player and order them best first.

    Ties on total go to the higher-ranked role of the final round; a player
    without a role loses every tie.
    """
    scores = [score_player(p, first_completer, assignments.get(p.id)) for p in players]
    scores.sort(key=lambda s: (s.total, s.role.rank if s.role else 0), reverse=True)
    return ScoreReport(scores=scores)
