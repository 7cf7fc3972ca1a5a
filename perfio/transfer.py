# perfio/transfer.py
#
# The per-connection transfer loop.
#
# Each connection is driven by its own task that repeatedly reads or
# writes a fixed-size buffer and adds the byte count to a Counter.
# The Counter is written only by that task.  The coordinator reads it
# between loop iterations.  Since curio tasks switch only at await
# points, a read always sees a complete value.

__all__ = ['Counter', 'transfer_loop']

import logging
log = logging.getLogger(__name__)

from curio import sleep

from .errors import EndOfStream


class Counter(object):
    '''
    Running byte count for one connection.  count never decreases.
    done is set once the loop driving the connection has exited.  The
    coordinator uses it to note streams that ended before the stop.
    '''
    __slots__ = ('count', 'done')

    def __init__(self):
        self.count = 0
        self.done = False

    def __repr__(self):
        return f'Counter(count={self.count}, done={self.done})'


async def transfer_loop(conn, action, counter, *, bufsize, terminator=None):
    '''
    Drive conn until terminator (a curio Event) is set, the peer closes,
    or an I/O error occurs.  action is conn.read or conn.write.  The
    connection is always closed on exit.
    '''
    buffer = bytearray(bufsize)
    try:
        while terminator is None or not terminator.is_set():
            try:
                nbytes = await action(buffer)
            except EndOfStream:
                log.debug('%r: end of stream', conn)
                break
            except OSError as e:
                log.error('%r: IO error: %s', conn, e)
                break
            counter.count += nbytes

            # Let other loops and the coordinator run even if I/O never blocks
            await sleep(0)
    finally:
        counter.done = True
        await conn.close()
