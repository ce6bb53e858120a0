"""
live-validate - realtime, rule-based validation for reactive forms

This package provides:
- InputValidator: per-field rule chains, nested validators, condition gating
- Live feedback pushed to the UI layer while a validator is enabled
- merge_results: the precedence rules used to combine result sets
- A reference in-memory reactive session (inputs, observers, messages)
- Exceptions for invalid arguments, rule results and validator trees
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .contracts import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
from .exceptions import *  # noqa: F401,F403
from .reactive import *  # noqa: F401,F403
