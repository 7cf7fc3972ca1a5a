# perfio/report.py
#
# Console output for client runs.  The Reporter only formats and
# writes.  It never touches run state.

__all__ = ['Reporter']

import sys

from .units import AUTO, auto_label, byte_label

HEADER = '  ID  |  Time   |   Count   |       Rate        |       Mean'
SEPARATOR = '-' * 40


class Reporter(object):
    '''
    Writes report lines to file (default sys.stdout) using unit for
    rates.  unit may be units.AUTO.
    '''
    def __init__(self, unit=AUTO, file=None):
        self.unit = unit
        self.file = file

    def _print(self, line):
        print(line, file=self.file if self.file is not None else sys.stdout)

    def _rate(self, bps):
        if self.unit is AUTO:
            return auto_label(bps)
        return bps / self.unit.divisor, self.unit.label

    def header(self):
        self._print(HEADER)

    def report(self, id, nbytes, elapsed, rate, mean):
        '''
        One line for connection id.  nbytes is the byte count being
        shown, elapsed the seconds since the connection started, and
        rate and mean are in bytes/sec.
        '''
        sent, sent_label = byte_label(nbytes)
        rate, rate_label = self._rate(rate)
        mean, mean_label = self._rate(mean)
        self._print(f'[{id:3d}] | {elapsed:6.2f}s | {sent:6.2f} {sent_label} | '
                    f'{rate:6.2f} {rate_label}\t| {mean:6.2f} {mean_label}')

    def separator(self):
        self._print(SEPARATOR)

    def summary(self, throughput):
        rate, label = auto_label(throughput)
        self._print(f'Throughput: {rate:.2f} {label}')
