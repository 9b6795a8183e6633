from .base import *  # noqa: F401,F403
from .integrations import *  # noqa: F401,F403
from .logging import *  # noqa: F401,F403
