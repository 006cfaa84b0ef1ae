"""Role definitions for Citadels."""

from dataclasses import dataclass, field

from .errors import UnknownRole


@dataclass(frozen=True, order=True)
class Role:
    """A character role. Roles compare by rank, which is also turn order."""

    rank: int
    name: str = field(compare=False)
    description: str = field(default="", compare=False)

    def __str__(self) -> str:
        return f"{self.name.lower()}({self.rank})"


# All available roles, in rank order
ROLES = {
    "Assassin": Role(
        rank=1,
        name="Assassin",
        description="Select another character to kill. That character loses their turn."
    ),
    "Thief": Role(
        rank=2,
        name="Thief",
        description=(
            "Select another character to rob. You take their gold when their turn begins. "
            "Cannot rob the Assassin or the killed character."
        ),
    ),
    "Magician": Role(
        rank=3,
        name="Magician",
        description="Swap your hand with another player OR discard and redraw any number of cards."
    ),
    "King": Role(
        rank=4,
        name="King",
        description="Gain 1 gold per yellow district. Also gains the crown."
    ),
    "Bishop": Role(
        rank=5,
        name="Bishop",
        description=(
            "Gain 1 gold per blue district. The Warlord cannot destroy your buildings "
            "unless you are assassinated."
        ),
    ),
    "Merchant": Role(
        rank=6,
        name="Merchant",
        description="Gain 1 gold per green district. Also gain 1 extra gold."
    ),
    "Architect": Role(
        rank=7,
        name="Architect",
        description="Draw 2 extra cards. Can build up to 3 districts."
    ),
    "Warlord": Role(
        rank=8,
        name="Warlord",
        description=(
            "Gain 1 gold per red district. May destroy one district at a reduced cost "
            "(not in 8-district cities)."
        ),
    ),
}

KING = ROLES["King"]


def get_role(name: str) -> Role:
    """Get a role by name, ignoring case."""
    for role in ROLES.values():
        if role.name.lower() == name.strip().lower():
            return role
    raise UnknownRole(f"Unknown role: {name}. Available: {', '.join(all_role_names())}")


def role_for_rank(rank: int) -> Role:
    """Get the role that acts at the given rank (1-8)."""
    for role in ROLES.values():
        if role.rank == rank:
            return role
    raise ValueError(f"No role has rank {rank}")


def all_roles() -> list[Role]:
    """All roles sorted by rank."""
    return sorted(ROLES.values())


def all_role_names() -> list[str]:
    """Lowercase names of every role, in rank order."""
    return [role.name.lower() for role in all_roles()]
