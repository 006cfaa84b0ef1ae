"""Game engine - roles, cards, phases, turns and scoring.

The `Game` facade lives in `citadels.engine.game`.
"""

from .roles import Role, ROLES
from .cards import Card, Color, DistrictDeck
from .phases import GamePhase
from .errors import GameError

__all__ = ["Role", "ROLES", "Card", "Color", "DistrictDeck", "GamePhase", "GameError"]
