"""Configuration package for pwvault.

The constants live in `config.settings`; they are re-exported here so that
`from config import SALT_LENGTH` keeps working. Add new settings to
`settings.py` only.
"""

from .settings import *  # noqa: F401,F403
from .settings import __all__  # noqa: F401
