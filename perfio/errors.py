# perfio/errors.py
#
# perfio specific exceptions

__all__ = [
    'PerfError', 'ConfigurationError', 'ConnectionFailed', 'EndOfStream',
]


class PerfError(Exception):
    '''
    Base class for all perfio-related exceptions
    '''


class ConfigurationError(PerfError):
    '''
    Raised if a run is configured with an invalid option.  Nothing
    has been connected when this is raised.
    '''


class ConnectionFailed(PerfError):
    '''
    Raised if a connection can't be resolved, connected, bound or
    tuned while the connections for a run are being created.  This is
    a chained exception. The __cause__ attribute contains the
    underlying OSError (if any).
    '''


class EndOfStream(PerfError):
    '''
    Raised by connection I/O when the peer has closed its end.
    This is normal termination, not a transfer error.
    '''
