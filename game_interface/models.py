# ABOUTME: Pydantic models for the text-adventure API requests, responses and client state
# ABOUTME: Field aliases match the server's camelCase JSON; outcomes form the command result union

from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class GameState(BaseModel):
    """
    Client-held game state carried in every command round trip.

    Only the inventory is interpreted. Any other fields the server adds are
    kept verbatim and re-emitted on the next encode.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    inventory: List[str]

    @classmethod
    def empty(cls) -> "GameState":
        return cls(inventory=[])


class GameScreen(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    body: List[str]


class CommandRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    context_screen_id: str = Field(alias="contextScreenId")
    command: str
    state: str


class _ItemDiffOutcome(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    success: bool
    action_type: Optional[str] = Field(default=None, alias="type")
    state: str
    items_added: List[str] = Field(alias="itemsAdded")
    items_removed: List[str] = Field(alias="itemsRemoved")


class MessageOutcome(_ItemDiffOutcome):
    """Command printed a message; the player stays on the same screen."""

    print_message: List[str] = Field(alias="printMessage")


class NavigationOutcome(_ItemDiffOutcome):
    """Command moved the player to a new screen."""

    screen: GameScreen


class FailureOutcome(BaseModel):
    """Command was not understood or not allowed."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str


CommandOutcome = Union[MessageOutcome, NavigationOutcome, FailureOutcome]
