"""Custom exceptions for live-validate."""

from .common_exceptions import (
    InvalidArgumentException,
    InvalidRuleResultException,
    MissingScopeException,
    EnvInvalidException,
)
from .validator_exceptions import (
    ValidatorException,
    ValidatorAlreadyAttachedException,
    ValidatorCycleException,
)


__all__ = [
    # common
    "InvalidArgumentException",
    "InvalidRuleResultException",
    "MissingScopeException",
    "EnvInvalidException",
    # validator tree
    "ValidatorException",
    "ValidatorAlreadyAttachedException",
    "ValidatorCycleException",
]
