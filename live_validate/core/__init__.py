"""The validator tree and the pieces it is built from."""

from .feedback import *  # noqa: F401,F403
from .input_validator import *  # noqa: F401,F403
from .merge import *  # noqa: F401,F403
from .user_data import *  # noqa: F401,F403
