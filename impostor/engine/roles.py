"""Role cards shown to each player during the reveal."""

from dataclasses import dataclass
from typing import ClassVar, Literal, Union


@dataclass(frozen=True)
class InnocentRole:
    """A crew member who knows the secret word."""

    secret_word: str
    category: str
    team: ClassVar[Literal["crew", "impostor"]] = "crew"

    @property
    def is_impostor(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.secret_word


@dataclass(frozen=True)
class ImpostorRole:
    """The impostor, who only sees the decoy hint."""

    decoy_hint: str
    team: ClassVar[Literal["crew", "impostor"]] = "impostor"

    @property
    def is_impostor(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.decoy_hint


RoleCard = Union[InnocentRole, ImpostorRole]

ROLE_DESCRIPTIONS = {
    "crew": "Describe the secret word so the group knows you're innocent.",
    "impostor": "You don't know the secret word! The others have a specific word related to your hint.",
}


def describe_role(card: RoleCard) -> str:
    """Get the instruction text for a role card."""
    return ROLE_DESCRIPTIONS[card.team]
