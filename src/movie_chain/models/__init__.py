"""Data models for the movie chain game"""

from .entities import (
    ChainStep,
    Film,
    NewGameResult,
    Performer,
    StepValidation,
)
from .game_state import (
    GamePhase,
    GameState,
    game_phase,
    is_won,
)

__all__ = [
    # Entity models
    "Performer",
    "Film",
    "ChainStep",
    # Authority responses
    "NewGameResult",
    "StepValidation",
    # Game state models
    "GamePhase",
    "GameState",
    "game_phase",
    "is_won",
]
