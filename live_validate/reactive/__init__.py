"""Reference in-memory implementation of the reactive scope contract."""

from .runtime import *  # noqa: F401,F403
from .session import *  # noqa: F401,F403
