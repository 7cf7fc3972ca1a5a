# test_timer.py

import time

from curio import *
from perfio import *


def test_timer_fires_once(kernel):
    results = []

    async def main():
        t = Timer('x', 0.05)
        results.append(t.fired())
        deadline = await t.wait()
        results.append(deadline == t.deadline)
        results.append(t.fired())
        results.append(time.monotonic() >= t.deadline)

    kernel.run(main())
    assert results == [False, True, True, True]


def test_disabled_timer_never_fires(kernel):
    async def main():
        for delay in (0, -1):
            t = Timer('x', delay)
            assert not t.enabled
            assert not t.fired(now=time.monotonic() + 1e9)
            assert await ignore_after(0.1, t.wait()) is None

    kernel.run(main())


def test_timer_start():
    t = Timer('x', 2.0, start=10.0)
    assert t.deadline == 12.0
    assert not t.fired(now=11.999)
    assert t.fired(now=12.0)


def test_timer_source():
    config = make_config(interval=0.125, duration=0.375)
    timers = TimerSource(config)
    assert timers.interval_timer(after=100.0).deadline == 100.125
    assert timers.interval_timer(after=100.0, rounds=3).deadline == \
        timers.stop_timer(after=100.0).deadline

    timers = TimerSource(make_config(interval=0, duration=0))
    assert not timers.interval_timer().enabled
    assert not timers.interval_timer(rounds=5).enabled
    assert not timers.stop_timer().enabled


def test_first_fired_earliest(kernel):
    async def main():
        slow = Timer('slow', 0.5)
        fast = Timer('fast', 0.05)
        off = Timer('off', 0)
        return await first_fired(slow, off, fast)

    assert kernel.run(main()).name == 'fast'


def test_first_fired_tie_prefers_first(kernel):
    async def main():
        now = time.monotonic()
        a = Timer('a', 0.05, start=now)
        b = Timer('b', 0.05, start=now)
        first = await first_fired(a, b)
        # Both have fired now.  Polling order still decides.
        again = await first_fired(b, a)
        return first.name, again.name

    assert kernel.run(main()) == ('a', 'b')


def test_first_fired_all_disabled(kernel):
    async def main():
        return await ignore_after(0.1, first_fired(Timer('a', 0), Timer('b', 0)))

    assert kernel.run(main()) is None
