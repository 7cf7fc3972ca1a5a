# test_report.py

import io

from perfio import *
from perfio.report import HEADER, SEPARATOR


def lines(out):
    return out.getvalue().splitlines()


def test_report_fixed_unit():
    out = io.StringIO()
    r = Reporter(get_unit('M'), file=out)
    r.report(3, 2500000, 1.5, 2e6, 1e6)
    assert lines(out) == ['[  3] |   1.50s |   2.50 MB |   2.00 MB/s\t|   1.00 MB/s']


def test_report_auto_unit():
    out = io.StringIO()
    r = Reporter(AUTO, file=out)
    r.report(0, 1000, 1.0, 1.25e8, 1.25e5)
    assert lines(out) == ['[  0] |   1.00s |   1.00 KB |   1.00 gbps\t|   1.00 mbps']


def test_header_separator_summary():
    out = io.StringIO()
    r = Reporter(get_unit('K'), file=out)
    r.header()
    r.separator()
    r.summary(2.5e8)
    assert lines(out) == [HEADER, SEPARATOR, 'Throughput: 2.00 gbps']


def test_report_defaults_to_stdout(capsys):
    Reporter().summary(0)
    assert capsys.readouterr().out == 'Throughput: 0.00 bps\n'
