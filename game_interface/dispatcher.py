# ABOUTME: Classifies untagged command responses into message, navigation or failure outcomes
# ABOUTME: Variants are tried in a fixed priority order; no match is a protocol violation

import logging
from typing import Any, Callable, List, Tuple, Type

from pydantic import BaseModel, ValidationError

from errors import ProtocolError
from .models import CommandOutcome, FailureOutcome, MessageOutcome, NavigationOutcome

logger = logging.getLogger(__name__)


def _is_message_shaped(raw: dict) -> bool:
    return "printMessage" in raw and "screen" not in raw


def _always(raw: dict) -> bool:
    return True


# Order matters: a response carrying both printMessage and screen must fall
# through to NavigationOutcome, and FailureOutcome is the catch-all.
OUTCOME_PRIORITY: List[Tuple[Type[BaseModel], Callable[[dict], bool]]] = [
    (MessageOutcome, _is_message_shaped),
    (NavigationOutcome, _always),
    (FailureOutcome, _always),
]


def classify(raw: Any) -> CommandOutcome:
    """
    Classify a raw command response.

    Args:
        raw: Decoded JSON body of a POST /command response

    Returns:
        The first outcome variant whose required fields all match

    Raises:
        ProtocolError: If the response matches none of the outcome shapes
    """
    if not isinstance(raw, dict):
        logger.error(
            f"Command response is not a JSON object: {type(raw).__name__}",
            extra={"event_type": "protocol_violation"},
        )
        raise ProtocolError(
            f"Command response must be a JSON object, got {type(raw).__name__}"
        )

    rejections = []
    for outcome_type, precondition in OUTCOME_PRIORITY:
        if not precondition(raw):
            rejections.append(f"{outcome_type.__name__}: precondition not met")
            continue
        try:
            outcome = outcome_type.model_validate(raw)
        except ValidationError as e:
            rejections.append(f"{outcome_type.__name__}: {e.error_count()} field error(s)")
            continue

        if isinstance(outcome, FailureOutcome) and outcome.success:
            logger.warning(
                "Failure-shaped response reports success=true",
                extra={"event_type": "protocol_warning"},
            )
        logger.debug(
            f"Classified command response as {outcome_type.__name__}",
            extra={"event_type": "response_classified", "outcome": outcome_type.__name__},
        )
        return outcome

    logger.error(
        "Command response matches no known outcome shape",
        extra={"event_type": "protocol_violation", "keys": sorted(raw.keys())},
    )
    raise ProtocolError(
        "Command response matches no known outcome shape ("
        + "; ".join(rejections)
        + ")"
    )
