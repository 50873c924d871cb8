"""
State Codec Package

LZ-string URI-safe compression and the GameState token codec built on it.
"""

from .lz_string import (
    URI_SAFE_ALPHABET,
    DecompressionError,
    compress_to_uri,
    decompress_from_uri,
)
from .state_codec import decode_state, encode_state, state_to_json

__all__ = [
    "URI_SAFE_ALPHABET",
    "DecompressionError",
    "compress_to_uri",
    "decompress_from_uri",
    "decode_state",
    "encode_state",
    "state_to_json",
]
