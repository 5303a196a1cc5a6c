"""Game engine - rules enforcement, phases, words and roles."""

from .controller import GameController
from .errors import (
    GameError,
    IllegalPhaseTransition,
    InsufficientPlayers,
    InvalidCategory,
    InvalidVoteTarget,
)
from .game import GameConfig, GameResult, GameSession, Outcome, Player, compute_outcome
from .phases import GamePhase
from .roles import ImpostorRole, InnocentRole
from .timer import TickClock, TurnTimer
from .words import CATEGORIES, RANDOM_CATEGORY, WordBank, WordPair

__all__ = [
    "GameController",
    "GameError",
    "IllegalPhaseTransition",
    "InsufficientPlayers",
    "InvalidCategory",
    "InvalidVoteTarget",
    "GameConfig",
    "GameResult",
    "GameSession",
    "Outcome",
    "Player",
    "compute_outcome",
    "GamePhase",
    "ImpostorRole",
    "InnocentRole",
    "TickClock",
    "TurnTimer",
    "CATEGORIES",
    "RANDOM_CATEGORY",
    "WordBank",
    "WordPair",
]
