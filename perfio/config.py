# perfio/config.py
#
# Run configuration.  A Config is created once, validated, and then
# handed explicitly to everything that needs it.  Nothing here is
# module-level mutable state.

__all__ = [
    'Config', 'make_config', 'CLIENT', 'SERVER', 'TCP', 'UDP',
    'DEFAULT_PORT', 'DEFAULT_HOST', 'DEFAULT_BUFSIZE',
]

from collections import namedtuple

from .errors import ConfigurationError
from .units import get_unit, parse_size

# Roles
CLIENT = 'client'
SERVER = 'server'

# Transports
TCP = 'tcp'
UDP = 'udp'

DEFAULT_PORT = 10101
DEFAULT_HOST = '127.0.0.1'

DEFAULT_BUFSIZE = {
    TCP: 128000,
    UDP: 8000,
}

Config = namedtuple('Config', [
    'role',          # CLIENT or SERVER
    'transport',     # TCP or UDP
    'host',          # Address to connect to (client) or bind (server)
    'port',
    'bufsize',       # Application buffer size in bytes
    'window',        # OS socket buffer size (0 = leave alone)
    'duration',      # Seconds to run (0 = unbounded)
    'interval',      # Seconds between reports (0 = none)
    'parallel',      # Number of parallel client connections
    'unit',          # Report Unit (or units.AUTO)
])


def _non_negative(name, value):
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f'{name} must be a number') from None
    if value < 0:
        raise ConfigurationError(f'{name} must be >= 0')
    return value


def _size(name, value):
    if isinstance(value, int):
        return value
    try:
        return parse_size(value)
    except ConfigurationError:
        raise ConfigurationError(f'invalid {name} {value!r}') from None


def make_config(role=CLIENT, *, transport=TCP, host=None, port=DEFAULT_PORT,
                bufsize=None, window=0, duration=10, interval=1,
                parallel=1, format='a'):
    '''
    Validate options and build a Config.  Raises ConfigurationError on
    the first invalid option.  Sizes may be given as ints or as strings
    with a K/M/G suffix.
    '''
    if role not in (CLIENT, SERVER):
        raise ConfigurationError(f'unknown role {role!r}')

    if transport not in DEFAULT_BUFSIZE:
        raise ConfigurationError(f'unknown transport {transport!r}')

    if host is None:
        host = DEFAULT_HOST if role == CLIENT else ''

    if not isinstance(port, int) or not 0 <= port <= 65535:
        raise ConfigurationError(f'invalid port {port!r}')

    if bufsize is None:
        bufsize = DEFAULT_BUFSIZE[transport]
    bufsize = _size('buffer size', bufsize)
    if bufsize <= 0:
        raise ConfigurationError('buffer size must be > 0')

    window = _size('window size', window)
    if window < 0:
        raise ConfigurationError('window size must be >= 0')

    if not isinstance(parallel, int) or parallel <= 0:
        raise ConfigurationError('number of streams must be > 0')

    return Config(
        role=role,
        transport=transport,
        host=host,
        port=port,
        bufsize=bufsize,
        window=window,
        duration=_non_negative('duration', duration),
        interval=_non_negative('interval', interval),
        parallel=parallel,
        unit=get_unit(format),
    )
