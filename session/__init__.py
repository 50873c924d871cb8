"""
Session Package

Contains the client-side session core:
- GameSession: owner of the current screen and state
- apply_outcome: pure transition function over SessionSnapshot values
- ClientConfiguration: typed settings loaded from pyproject.toml
- handle_input: slash-command dispatch for the interactive loop
"""

from .game_session import (
    INITIAL_SCREEN_ID,
    GameSession,
    RenderedOutcome,
    SessionSnapshot,
    apply_outcome,
)
from .game_configuration import ClientConfiguration
from .commands import CommandResult, handle_input

__all__ = [
    "INITIAL_SCREEN_ID",
    "GameSession",
    "RenderedOutcome",
    "SessionSnapshot",
    "apply_outcome",
    "ClientConfiguration",
    "CommandResult",
    "handle_input",
]
