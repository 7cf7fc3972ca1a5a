# perfio/units.py
#
# Conversion of raw byte counts and byte rates into human units.
#
# All rates inside perfio are kept in bytes per second.  A Unit holds
# the divisor that turns bytes/sec into the displayed quantity, so the
# bit-based units use a divisor of (bits-per-unit / 8).  For example,
# 1 mbps is 1e6 bits/sec which is 1.25e5 bytes/sec.

__all__ = [
    'Unit', 'AUTO', 'UNITS', 'get_unit', 'auto_label', 'byte_label',
    'parse_size',
]

from collections import namedtuple

from .errors import ConfigurationError

Unit = namedtuple('Unit', ['divisor', 'label'])

# Sentinel unit.  The divisor and label are re-derived per value.
AUTO = Unit(None, 'auto')

UNITS = {
    'k': Unit(125, 'kbps'),
    'm': Unit(1.25e5, 'mbps'),
    'g': Unit(1.25e8, 'gbps'),
    't': Unit(1.25e11, 'tbps'),
    'K': Unit(1e3, 'KB/s'),
    'M': Unit(1e6, 'MB/s'),
    'G': Unit(1e9, 'GB/s'),
    'T': Unit(1e12, 'TB/s'),
    'a': AUTO,
}

# Checked in descending order by auto_label()
_AUTO_TABLE = [
    UNITS['t'],
    UNITS['g'],
    UNITS['m'],
    UNITS['k'],
]

_BYTE_TABLE = [
    (1e12, 'TB'),
    (1e9, 'GB'),
    (1e6, 'MB'),
]

_SIZE_SUFFIXES = {
    'K': 1000,
    'M': 1000 ** 2,
    'G': 1000 ** 3,
}


def get_unit(letter):
    '''
    Return the Unit selected by a format letter.
    '''
    try:
        return UNITS[letter]
    except KeyError:
        raise ConfigurationError(f'invalid report format {letter!r}') from None


def auto_label(bps):
    '''
    Pick the largest bit-rate unit that keeps the displayed value at or
    above 1.  bps is in bytes per second.  Returns (rate, label).
    '''
    for unit in _AUTO_TABLE:
        if bps >= unit.divisor:
            return bps / unit.divisor, unit.label
    return bps * 8, 'bps'


def byte_label(nbytes):
    '''
    Scale a byte count for display.  Returns (value, label).
    '''
    for divisor, label in _BYTE_TABLE:
        if nbytes >= divisor:
            return nbytes / divisor, label
    return nbytes / 1e3, 'KB'


def parse_size(text):
    '''
    Parse a size such as "8000", "128K" or "1M" into a byte count.
    '''
    orig = text
    text = str(text).strip()
    multiplier = 1
    if text and text[-1].upper() in _SIZE_SUFFIXES:
        multiplier = _SIZE_SUFFIXES[text[-1].upper()]
        text = text[:-1]
    try:
        size = int(text)
    except ValueError:
        raise ConfigurationError(f'invalid size {orig!r}') from None
    return size * multiplier
