"""Players and the participants that make their decisions."""

from .player import Player
from .participants import AutomatedParticipant, HumanParticipant

__all__ = ["Player", "AutomatedParticipant", "HumanParticipant"]
