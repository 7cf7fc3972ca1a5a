# perfio/timer.py
#
# Single-shot wake-up signals.
#
# A Timer fires exactly once, at its deadline.  It can be polled with
# fired() or awaited with wait().  A Timer created with a delay of zero
# (or less) is disabled.  It has no deadline, never reports itself as
# fired, and waiting on it suspends forever.  This lets the coordinator
# treat "no progress reports" and "run until interrupted" exactly like
# the normal case.
#
# Timers are never reused.  To keep sampling periodically, ask the
# TimerSource for a new interval timer after each firing.  The time
# a timer is polled or awaited is time.monotonic().

__all__ = ['Timer', 'TimerSource', 'first_fired']

import time

from curio import sleep, Event


class Timer(object):
    '''
    A wake-up signal that fires once, delay seconds after start (a
    time.monotonic() value, default now).
    '''
    __slots__ = ('name', 'deadline')

    def __init__(self, name, delay, *, start=None):
        self.name = name
        if delay > 0:
            if start is None:
                start = time.monotonic()
            self.deadline = start + delay
        else:
            self.deadline = None

    def __repr__(self):
        return f'Timer({self.name!r}, deadline={self.deadline!r})'

    @property
    def enabled(self):
        return self.deadline is not None

    def fired(self, now=None):
        '''
        Non-blocking poll.  True once the deadline has passed.
        '''
        if self.deadline is None:
            return False
        if now is None:
            now = time.monotonic()
        return now >= self.deadline

    async def wait(self):
        '''
        Wait for the timer to fire and return its deadline.  Never
        returns for a disabled timer.
        '''
        if self.deadline is None:
            await Event().wait()
        delay = self.deadline - time.monotonic()
        if delay > 0:
            await sleep(delay)
        return self.deadline


class TimerSource(object):
    '''
    Makes the progress and stop timers for a run from its Config.
    '''
    def __init__(self, config):
        self.interval = config.interval
        self.duration = config.duration

    def interval_timer(self, after=None, rounds=1):
        '''
        A timer firing rounds intervals after the time after.  Anchoring
        every round to the same start keeps the schedule from drifting.
        '''
        return Timer('interval', self.interval * rounds, start=after)

    def stop_timer(self, after=None):
        return Timer('stop', self.duration, start=after)


async def first_fired(*timers):
    '''
    Wait until one of the given timers fires and return it.  Timers are
    checked in argument order, so on a tie the earlier argument wins.
    '''
    for timer in timers:
        if timer.fired():
            return timer

    armed = [timer for timer in timers if timer.enabled]
    if not armed:
        await Event().wait()

    # min() keeps the first of equal deadlines
    timer = min(armed, key=lambda t: t.deadline)
    await timer.wait()
    return timer
