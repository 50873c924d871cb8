# ABOUTME: Slash-command handling for the interactive client (/inventory, /look, /help, ...)
# ABOUTME: Anything that is not a slash command is forwarded to the game server as a command

from dataclasses import dataclass, field
from typing import Callable, Dict, List

from .game_session import GameSession

HELP_TEXT = """\
List of commands:
/inventory
    List your inventory

/screen-id
(alias: /screen)
    Print the current screen's
    id (useful when creating a
    new screen)

/look
(alias: /whereami)
(alias: /where)
(alias: /repeat)
(alias: /again)
    Print the current screen
    again

/help
(alias: /?)
    Print this help message

/exit
(alias: /quit)
    Quit the game"""


@dataclass
class CommandResult:
    lines: List[str] = field(default_factory=list)
    quit: bool = False


def _inventory(session: GameSession) -> CommandResult:
    lines = ["Current inventory:"]
    lines.extend(f"  {item}" for item in session.current_inventory())
    return CommandResult(lines=lines)


def _screen_id(session: GameSession) -> CommandResult:
    return CommandResult(lines=[session.current_screen_id()])


def _look(session: GameSession) -> CommandResult:
    return CommandResult(lines=session.current_screen_body())


def _help(session: GameSession) -> CommandResult:
    return CommandResult(lines=HELP_TEXT.splitlines())


def _quit(session: GameSession) -> CommandResult:
    return CommandResult(quit=True)


SLASH_COMMANDS: Dict[str, Callable[[GameSession], CommandResult]] = {
    "/inventory": _inventory,
    "/screen-id": _screen_id,
    "/screen": _screen_id,
    "/look": _look,
    "/whereami": _look,
    "/where": _look,
    "/repeat": _look,
    "/again": _look,
    "/help": _help,
    "/?": _help,
    "/exit": _quit,
    "/quit": _quit,
}


def handle_input(session: GameSession, user_input: str) -> CommandResult:
    """
    Evaluate one line of player input.

    Slash commands are answered locally from the session. Everything else
    is submitted to the server; client errors propagate to the caller.
    """
    text = user_input.strip()
    handler = SLASH_COMMANDS.get(text)
    if handler is not None:
        return handler(session)

    rendered = session.issue_command(text)
    return CommandResult(lines=rendered.lines)
