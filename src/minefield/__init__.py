"""
Minefield engine.

Provides the Minesweeper grid state machine (spots, mine placement, flood
reveal, auto-step) and a gymnasium environment hosting it.
"""
from .spot import Spot, SpotState, StepResult, FlagToggleResult
from .field import Minefield, FieldConfig, BEGINNER, INTERMEDIATE, EXPERT
from .environment import MinefieldEnv, make_vec_env

__all__ = [
    "Spot",
    "SpotState",
    "StepResult",
    "FlagToggleResult",
    "Minefield",
    "FieldConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "MinefieldEnv",
    "make_vec_env",
]
