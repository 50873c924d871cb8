"""
REST API client for the text-adventure server.

Performs the two blocking network operations the session needs and turns
every transport-level problem into a TransportError. It holds no session
state: the caller supplies the screen id and state token on each call.
"""

import logging
from typing import Any, Dict

import requests
from pydantic import ValidationError

from errors import TransportError
from game_interface.models import CommandRequest, GameScreen


logger = logging.getLogger(__name__)


class ProtocolClient:
    """Client for the text-adventure screen and command endpoints."""

    def __init__(self, base_url: str, timeout: float = 30.0):
        """Initialize the protocol client.

        Args:
            base_url: Base URL of the API, e.g. https://host/api
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def fetch_screen(self, screen_id: str) -> GameScreen:
        """Fetch a screen by id.

        Args:
            screen_id: Opaque screen identifier

        Returns:
            The screen exactly as the server describes it

        Raises:
            TransportError: On network failure or a body that is not a screen
        """
        url = f"{self.base_url}/screen/{screen_id}"
        data = self._request_json("GET", url)

        try:
            return GameScreen.model_validate(data)
        except ValidationError as e:
            logger.error(
                f"Screen response for {screen_id} is not a screen: {e}",
                extra={"event_type": "transport_failed", "url": url},
            )
            raise TransportError(f"Response for screen {screen_id} is not a screen: {e}") from e

    def submit_command(
        self, context_screen_id: str, command: str, state: str
    ) -> Dict[str, Any]:
        """Submit a command.

        Args:
            context_screen_id: Id of the screen the player is on
            command: Command text, already trimmed
            state: State token, sent verbatim

        Returns:
            Raw decoded JSON response, still unclassified

        Raises:
            TransportError: On network failure or invalid JSON
        """
        request = CommandRequest(
            context_screen_id=context_screen_id, command=command, state=state
        )
        logger.debug(
            f"Submitting command '{command}' on screen {context_screen_id}",
            extra={
                "event_type": "command_submitted",
                "command": command,
                "screen_id": context_screen_id,
            },
        )
        return self._request_json(
            "POST", f"{self.base_url}/command", json=request.model_dump(by_alias=True)
        )

    def _request_json(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = requests.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            # JSON decode failures from response.json() land here too
            logger.error(
                f"{method} {url} failed: {e}",
                extra={"event_type": "transport_failed", "url": url},
            )
            raise TransportError(f"{method} {url} failed: {e}") from e
