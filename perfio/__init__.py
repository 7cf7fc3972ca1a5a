# perfio/__init__.py

__version__ = '0.1'

from .errors import *
from .units import *
from .config import *
from .timer import *
from .connection import *
from .transfer import *
from .report import *
from .client import *
from .server import *

__all__ = [*errors.__all__,
           *units.__all__,
           *config.__all__,
           *timer.__all__,
           *connection.__all__,
           *transfer.__all__,
           *report.__all__,
           *client.__all__,
           *server.__all__,
           ]
