from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

# A rule takes the field value (plus any arguments bound at registration) and
# returns None when the value passes or a single error message when it fails.
Rule = Callable[..., Optional[str]]


class ValidatorRule(ABC):
    """
    Contract for configurable validation rules.

    Subclasses hold their configuration as attributes and implement
    `validate`. Instances are callable, so they can be registered with
    `InputValidator.add_rule` like any plain function.
    """

    @abstractmethod
    def validate(self, value: Any) -> Optional[str]:
        """
        Validate the current value of a single field.

        Args:
            value: The field's current value.

        Returns:
            None when the value passes, otherwise the message to show next to the field.
        """
        raise NotImplementedError

    def __call__(self, value: Any) -> Optional[str]:
        return self.validate(value)
