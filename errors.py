"""
Exception hierarchy for the text-adventure client.

Every error the session core can raise derives from AdventureClientError so
the REPL can report it and keep the session alive.
"""


class AdventureClientError(Exception):
    """Base class for all client-side errors."""


class TransportError(AdventureClientError):
    """Network or HTTP failure, or a response body that is not valid JSON."""


class DecodeError(AdventureClientError):
    """A state token is not a valid product of the state codec."""


class ProtocolError(AdventureClientError):
    """A command response matches none of the known outcome shapes."""


class SessionNotStartedError(AdventureClientError):
    """The session was used before its initial screen was fetched."""
