"""
The main module for migrating an oracle schema to sqlite
"""

# -----------------------------------------------

import logging

from ora2sqlite.o2s import *  # noqa: F401,F403
from ora2sqlite.mgr import BASE, MANAGER, do_etl  # noqa: F401

__version__ = '0.1.0'

logging.getLogger('o2s').addHandler(logging.NullHandler())

# -----------------------------------------------
# End.
