# perfio/client.py
#
# Client side of a measurement run.
#
# A ClientRun opens a fixed set of connections, starts one transfer
# loop per connection writing as fast as it can, and then sits on
# two timers.  Each time the interval timer fires, every connection's
# counter is sampled and reported.  When the stop timer fires, final
# per-connection figures and the aggregate throughput are reported
# and the loops are shut down.

__all__ = [
    'ClientRun', 'ConnectionSet', 'StreamState', 'Sample', 'StreamResult',
    'RunResult', 'byte_rate',
]

import time
from collections import namedtuple

import logging
log = logging.getLogger(__name__)

from curio import TaskGroup, Event

from .connection import connection_factory
from .report import Reporter
from .timer import TimerSource, first_fired
from .transfer import Counter, transfer_loop

# One connection at one sampling point
Sample = namedtuple('Sample', [
    'id',
    'window_bytes',      # Bytes since the previous sample
    'window_seconds',    # Seconds since the previous sample
    'total_bytes',       # Bytes since the start
    'total_seconds',     # Seconds since the start
    'rate',              # window_bytes / window_seconds
    'mean',              # total_bytes / total_seconds
])

StreamResult = namedtuple('StreamResult', ['id', 'total_bytes', 'elapsed', 'mean'])

# streams is a list of StreamResult in id order.  throughput is the sum of their means.
RunResult = namedtuple('RunResult', ['streams', 'throughput'])


def byte_rate(nbytes, seconds):
    '''
    Bytes per second.  An empty or negative interval gives 0.0.
    '''
    if seconds <= 0:
        return 0.0
    return nbytes / seconds


class StreamState(object):
    '''
    Bookkeeping for one connection of a run.
    '''
    __slots__ = ('id', 'conn', 'counter', 'start_time', 'last_time', 'last_count')

    def __init__(self, id, conn):
        self.id = id
        self.conn = conn
        self.counter = Counter()
        self.start_time = None
        self.last_time = None
        self.last_count = 0

    def __repr__(self):
        return f'StreamState(id={self.id}, conn={self.conn!r}, counter={self.counter!r})'

    def start(self, now):
        self.start_time = self.last_time = now

    def sample(self, now):
        total = self.counter.count
        window_bytes = total - self.last_count
        window_seconds = now - self.last_time
        total_seconds = now - self.start_time
        self.last_count = total
        self.last_time = now
        return Sample(self.id, window_bytes, window_seconds, total, total_seconds,
                      byte_rate(window_bytes, window_seconds),
                      byte_rate(total, total_seconds))

    def result(self, now):
        total = self.counter.count
        elapsed = now - self.start_time
        return StreamResult(self.id, total, elapsed, byte_rate(total, elapsed))


class ConnectionSet(object):
    '''
    The connections of one run, indexed 0..N-1 in creation order.
    '''
    def __init__(self, conns):
        self.streams = [StreamState(id, conn) for id, conn in enumerate(conns)]

    def __len__(self):
        return len(self.streams)

    def __iter__(self):
        return iter(self.streams)

    def __getitem__(self, id):
        return self.streams[id]

    @classmethod
    async def open(cls, factory, count):
        '''
        Make count connections using factory.  If any of them fails, the
        ones already made are closed and the error propagates.
        '''
        conns = []
        try:
            for _ in range(count):
                conns.append(await factory())
        except BaseException:
            for conn in conns:
                await conn.close()
            raise
        return cls(conns)


class ClientRun(object):
    '''
    Coordinator for the transmitting side.  factory, reporter and
    timers default to ones made from config.
    '''
    def __init__(self, config, *, factory=None, reporter=None, timers=None):
        self.config = config
        self.factory = factory if factory is not None else connection_factory(config)
        self.reporter = reporter if reporter is not None else Reporter(config.unit)
        self.timers = timers if timers is not None else TimerSource(config)

    async def run(self):
        '''
        Run to completion and return the RunResult.  With a duration of
        zero this only ends when cancelled.
        '''
        conns = await ConnectionSet.open(self.factory, self.config.parallel)
        log.debug('Opened %d connections', len(conns))
        terminator = Event()

        self.reporter.header()
        async with TaskGroup() as g:
            for stream in conns:
                await g.spawn(transfer_loop(stream.conn, stream.conn.write, stream.counter,
                                            bufsize=self.config.bufsize,
                                            terminator=terminator))
                stream.start(time.monotonic())

            origin = time.monotonic()
            rounds = 1
            progress = self.timers.interval_timer(after=origin)
            stop = self.timers.stop_timer(after=origin)
            while True:
                # On a tie the progress round goes first
                fired = await first_fired(progress, stop)
                if fired is stop:
                    break
                rounds += 1
                progress = self.timers.interval_timer(after=origin, rounds=rounds)
                self._report_progress(conns, time.monotonic())

            result = self._report_final(conns, time.monotonic())
            await terminator.set()
            await g.cancel_remaining()
        return result

    def _report_progress(self, conns, now):
        for stream in conns:
            s = stream.sample(now)
            self.reporter.report(s.id, s.window_bytes, s.total_seconds, s.rate, s.mean)
        if len(conns) > 1:
            self.reporter.separator()

    def _report_final(self, conns, now):
        results = [stream.result(now) for stream in conns]
        for stream, r in zip(conns, results):
            if stream.counter.done:
                log.info('Stream %d ended before the run stopped (%d bytes)', r.id, r.total_bytes)
        for r in results:
            self.reporter.report(r.id, r.total_bytes, r.elapsed, r.mean, r.mean)
        throughput = sum(r.mean for r in results)
        self.reporter.summary(throughput)
        return RunResult(results, throughput)
