"""
GameSession: owner of the current screen and state for one play session.

Transitions are computed by the pure function apply_outcome(), which takes
an immutable SessionSnapshot and a classified outcome and returns the next
snapshot plus the lines to render. GameSession only swaps snapshots after a
whole submit/classify/decode cycle has succeeded, so a failed command never
leaves a half-applied state behind.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple

from codec.state_codec import decode_state, encode_state
from errors import SessionNotStartedError
from game_interface.dispatcher import classify
from game_interface.models import (
    CommandOutcome,
    FailureOutcome,
    GameScreen,
    GameState,
    MessageOutcome,
    NavigationOutcome,
)

logger = logging.getLogger(__name__)

INITIAL_SCREEN_ID = "0290922a-59ce-458b-8dbc-1c33f646580a"


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything the session knows between two commands."""

    screen: GameScreen
    state: GameState
    # Token exactly as last received, sent back verbatim on the next command
    state_token: str

    @classmethod
    def initial(cls, screen: GameScreen) -> "SessionSnapshot":
        state = GameState.empty()
        return cls(screen=screen, state=state, state_token=encode_state(state))


@dataclass(frozen=True)
class RenderedOutcome:
    """Result of one command, ready for display."""

    kind: Literal["message", "navigation", "failure"]
    lines: List[str] = field(default_factory=list)
    success: bool = True


def render_item_changes(items_added: List[str], items_removed: List[str]) -> List[str]:
    lines = []
    if items_added:
        lines.append("Items added:")
        lines.extend(f"+ {item}" for item in items_added)
    if items_removed:
        lines.append("Items removed:")
        lines.extend(f"- {item}" for item in items_removed)
    return lines


def apply_outcome(
    snapshot: SessionSnapshot, outcome: CommandOutcome
) -> Tuple[SessionSnapshot, RenderedOutcome]:
    """
    Apply a classified outcome to a snapshot.

    Args:
        snapshot: Snapshot the command was submitted from
        outcome: Classified server response

    Returns:
        Tuple of (next snapshot, rendered outcome). For failures the input
        snapshot is returned unchanged.

    Raises:
        DecodeError: If the outcome's state token is invalid; nothing is applied
    """
    if isinstance(outcome, FailureOutcome):
        return snapshot, RenderedOutcome(
            kind="failure", lines=[outcome.message], success=outcome.success
        )

    # Decode first so a bad token leaves the snapshot untouched
    new_state = decode_state(outcome.state)
    item_lines = render_item_changes(outcome.items_added, outcome.items_removed)

    if isinstance(outcome, NavigationOutcome):
        next_snapshot = SessionSnapshot(
            screen=outcome.screen, state=new_state, state_token=outcome.state
        )
        lines = list(outcome.screen.body) + item_lines
        return next_snapshot, RenderedOutcome(
            kind="navigation", lines=lines, success=outcome.success
        )

    if isinstance(outcome, MessageOutcome):
        next_snapshot = SessionSnapshot(
            screen=snapshot.screen, state=new_state, state_token=outcome.state
        )
        lines = list(outcome.print_message) + item_lines
        return next_snapshot, RenderedOutcome(
            kind="message", lines=lines, success=outcome.success
        )

    raise TypeError(f"Unknown outcome type: {type(outcome).__name__}")


class GameSession:
    """Single-writer session driving a protocol client."""

    def __init__(self, client, initial_screen_id: str = INITIAL_SCREEN_ID):
        """Initialize the session.

        Args:
            client: Object providing fetch_screen(screen_id) and
                submit_command(context_screen_id, command, state)
            initial_screen_id: Screen to fetch on start
        """
        self.client = client
        self.initial_screen_id = initial_screen_id
        self._snapshot: Optional[SessionSnapshot] = None

    @property
    def snapshot(self) -> SessionSnapshot:
        if self._snapshot is None:
            raise SessionNotStartedError("Session has not been started")
        return self._snapshot

    @property
    def started(self) -> bool:
        return self._snapshot is not None

    def start_session(self) -> GameScreen:
        """Fetch the starting screen and reset state to an empty inventory."""
        screen = self.client.fetch_screen(self.initial_screen_id)
        self._snapshot = SessionSnapshot.initial(screen)
        logger.info(
            f"Session started on screen {screen.id}",
            extra={"event_type": "session_started", "screen_id": screen.id},
        )
        return screen

    def current_inventory(self) -> List[str]:
        return list(self.snapshot.state.inventory)

    def current_screen_id(self) -> str:
        return self.snapshot.screen.id

    def current_screen_body(self) -> List[str]:
        return list(self.snapshot.screen.body)

    def issue_command(self, text: str) -> RenderedOutcome:
        """
        Submit a command and apply the server's response.

        The screen id and state token are captured before the call; the
        session is only updated once the response has been classified and
        its state decoded.

        Raises:
            TransportError, ProtocolError, DecodeError: session left unchanged
        """
        command = text.strip()
        snapshot = self.snapshot

        raw = self.client.submit_command(
            snapshot.screen.id, command, snapshot.state_token
        )
        outcome = classify(raw)
        next_snapshot, rendered = apply_outcome(snapshot, outcome)
        self._snapshot = next_snapshot

        logger.info(
            f"Command '{command}' -> {rendered.kind}",
            extra={
                "event_type": "outcome_applied",
                "command": command,
                "outcome": rendered.kind,
                "screen_id": next_snapshot.screen.id,
                "inventory": list(next_snapshot.state.inventory),
            },
        )
        return rendered
