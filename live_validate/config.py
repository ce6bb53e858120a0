import os

from live_validate.exceptions import EnvInvalidException

# Priority of the live feedback observer; keep it above observers that do real work
DEFAULT_VALIDATOR_PRIORITY = 1000

# Joins a module namespace and a field-local name into a fully-qualified key
NAMESPACE_SEPARATOR = "-"

# Per-session marker for the one-time UI setup
INITIALIZED_KEY_NAME = "live-validate-initialized"


def get_default_priority() -> int:
    raw = os.getenv("VALIDATOR_PRIORITY")
    if raw is None or raw == "":
        return DEFAULT_VALIDATOR_PRIORITY
    try:
        return int(raw)
    except ValueError:
        raise EnvInvalidException("VALIDATOR_PRIORITY", raw)


def get_feedback_message_type() -> str | None:
    return os.getenv("VALIDATION_MESSAGE_TYPE") or None


def get_init_message_type() -> str:
    return os.getenv("VALIDATION_INIT_MESSAGE_TYPE", "validation-init")
