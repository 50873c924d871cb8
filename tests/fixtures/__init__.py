# ABOUTME: Test fixtures module for deterministic client testing
# ABOUTME: Provides canned server responses and a fake protocol client

from .responses import (
    CAVE_SCREEN,
    START_SCREEN,
    FakeProtocolClient,
    failure_response,
    message_response,
    navigation_response,
    state_token,
)

__all__ = [
    "CAVE_SCREEN",
    "START_SCREEN",
    "FakeProtocolClient",
    "failure_response",
    "message_response",
    "navigation_response",
    "state_token",
]
