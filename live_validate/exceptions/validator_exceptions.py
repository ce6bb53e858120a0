from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from live_validate.core.input_validator import InputValidator


class ValidatorException(ValueError):
    def __init__(self, message: str, validator: 'InputValidator'):
        super().__init__(message)
        self.message = message
        self.validator = validator


class ValidatorAlreadyAttachedException(ValidatorException):
    def __init__(self, validator: 'InputValidator'):
        super().__init__(
            f"{validator!r} is already a child of {validator.parent!r}; "
            "a validator can only be attached to one parent.",
            validator,
        )


class ValidatorCycleException(ValidatorException):
    def __init__(self, validator: 'InputValidator', parent: 'InputValidator'):
        super().__init__(
            f"Attaching {validator!r} to {parent!r} would make the validator tree cyclic.",
            validator,
        )
        self.parent = parent
