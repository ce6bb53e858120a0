from typing import Any, Optional


class InvalidArgumentException(TypeError):
    def __init__(self, method: str, argument: str, expected: str):
        super().__init__(
            f"{method} was called with an invalid `{argument}` argument; {expected} expected"
        )
        self.method = method
        self.argument = argument


class InvalidRuleResultException(TypeError):
    """
    Raised when a rule returns something other than `None` or a single string.

    Rules report failure through their return value only; any other shape is a
    programming error in the rule and aborts the validation pass.
    """

    def __init__(self, input_id: str, result: Any):
        super().__init__(
            f"Result of '{input_id}' validation was not None or a single string "
            f"(got {type(result).__name__})"
        )
        self.input_id = input_id
        self.result = result


class MissingScopeException(RuntimeError):
    def __init__(self):
        super().__init__(
            "InputValidator objects must be created with a reactive scope "
            "(a session or a module scope of one)."
        )


class EnvInvalidException(ValueError):
    def __init__(self, env_name: str, value: Optional[str] = None, supported_values: Optional[list[str]] = None):
        message = f"[ENV INVALID] Invalid environment variable: `{env_name}`"
        if value:
            message += f" (value: `{value}`) "
        if supported_values:
            message += f" (supported values: {', '.join(supported_values)})"
        super().__init__(message)
