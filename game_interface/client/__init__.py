"""
Game Client Package

Contains the REST API client for connecting to the text-adventure server.
"""

from .protocol_client import ProtocolClient

__all__ = ["ProtocolClient"]
