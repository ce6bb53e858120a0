import logging
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel

from live_validate.config import get_feedback_message_type
from live_validate.utils.serialisation import clear_results, pascal_case_to_snake_case

if TYPE_CHECKING:
    from live_validate.contracts.reactive_scope import ReactiveScope

logger = logging.getLogger(__name__)


class ValidationFeedback(BaseModel):
    """
    The message pushed to the UI layer after each validation pass.

    `results` maps fully-qualified field keys to None (passing) or the message
    to show next to the field.
    """
    model_config = {"frozen": True}

    results: dict[str, Optional[str]]

    def get_event_name(self) -> str:
        """Message type used on the UI channel (`VALIDATION_MESSAGE_TYPE` overrides it)."""
        return get_feedback_message_type() or pascal_case_to_snake_case(self.__class__.__name__)

    def broadcast_as(self) -> dict[str, Optional[str]]:
        return dict(self.results)

    def cleared(self) -> 'ValidationFeedback':
        """Same fields, all passing. Sent when feedback is switched off."""
        return self.__class__(results=clear_results(self.results))

    @property
    def has_errors(self) -> bool:
        return any(message is not None for message in self.results.values())


def send_feedback(scope: 'ReactiveScope', feedback: ValidationFeedback) -> None:
    failing = sum(message is not None for message in feedback.results.values())
    logger.debug(f"[VALIDATOR] Sending feedback for {len(feedback.results)} field(s), {failing} failing")
    scope.send_custom_message(feedback.get_event_name(), feedback.broadcast_as())


__all__ = ["ValidationFeedback", "send_feedback"]
