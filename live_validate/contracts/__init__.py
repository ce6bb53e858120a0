"""Contract classes and abstract interfaces.

These are the seams between the validator and its host: the reactive scope it
reads fields from, and the rules it evaluates.
"""

from .reactive_scope import ObserverHandle, ReactiveCell, ReactiveScope
from .validator_rule import Rule, ValidatorRule

__all__ = [
    "ObserverHandle",
    "ReactiveCell",
    "ReactiveScope",
    "Rule",
    "ValidatorRule",
]
