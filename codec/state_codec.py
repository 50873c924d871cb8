"""
State token codec.

Turns a GameState into the compact, URI-safe token the server expects in
every command request, and back again. The token is canonical compact JSON
compressed with the LZ-string URI-safe scheme, so tokens produced here are
interchangeable with the ones the server sends.
"""

import logging

from pydantic import ValidationError

from errors import DecodeError
from game_interface.models import GameState
from .lz_string import DecompressionError, compress_to_uri, decompress_from_uri

logger = logging.getLogger(__name__)


def state_to_json(state: GameState) -> str:
    """Serialize state as compact JSON with declared fields first."""
    return state.model_dump_json()


def encode_state(state: GameState) -> str:
    """
    Encode a GameState into a URI-safe state token.

    Args:
        state: State to encode

    Returns:
        State token
    """
    return compress_to_uri(state_to_json(state))


def decode_state(token: str) -> GameState:
    """
    Decode a state token back into a GameState.

    Args:
        token: Token produced by encode_state or sent by the server

    Returns:
        The decoded GameState, including any fields this client does not know

    Raises:
        DecodeError: If the token is corrupt or does not hold a GameState
    """
    try:
        text = decompress_from_uri(token)
    except DecompressionError as e:
        logger.warning(
            f"Failed to decompress state token: {e}",
            extra={"event_type": "state_decode_failed", "token": token},
        )
        raise DecodeError(f"Failed to decompress state token: {e}") from e

    try:
        return GameState.model_validate_json(text)
    except ValidationError as e:
        logger.warning(
            "Decompressed state is not a valid GameState",
            extra={"event_type": "state_decode_failed", "state_json": text},
        )
        raise DecodeError(f"Failed to parse state JSON {text!r}: {e}") from e
