"""
Game Interface Layer

Wire-level pieces of the text-adventure protocol: the pydantic models for
requests, responses and client state, the response classifier, and the
REST client.
"""

from .models import (
    CommandOutcome,
    CommandRequest,
    FailureOutcome,
    GameScreen,
    GameState,
    MessageOutcome,
    NavigationOutcome,
)
from .dispatcher import classify

__all__ = [
    "CommandOutcome",
    "CommandRequest",
    "FailureOutcome",
    "GameScreen",
    "GameState",
    "MessageOutcome",
    "NavigationOutcome",
    "classify",
]
