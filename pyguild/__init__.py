"""
Guild Channel API Wrapper
~~~~~~~~~~~~~~~~~~~~~~~~~

A wrapper for guild channels, their permission overwrites and the REST routes to manage them.

:copyright: (c) 2024-present MCausc78
:license: MIT, see LICENSE for more details.

"""

from . import (
    routes as routes,
    utils as utils,
)

from .channel import *
from .client import *
from .core import *
from .enums import *
from .errors import *
from .flags import *
from .guild import *
from .http import *
from .invite import *
from .message import *
from .parser import *
from .permissions import *
from .state import *
from .utils import *
from .webhook import *

import typing

if typing.TYPE_CHECKING:
    from . import raw as raw

del typing
