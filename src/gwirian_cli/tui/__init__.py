"""Interactive terminal navigation: setup, then project/feature/scenario browsing."""

from .navigator import NavigationSession, run_tui
from .state import Screen, SetupStep, Stage, ViewState, transition

__all__ = [
    "NavigationSession",
    "run_tui",
    "Screen",
    "SetupStep",
    "Stage",
    "ViewState",
    "transition",
]
