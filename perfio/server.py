# perfio/server.py
#
# Receiving side of a measurement run.  The server has no notion of
# run length.  It drains every connection it gets until the peer goes
# away, so the client's stop timer is what ends a run.

__all__ = ['ServerRun']

import logging
log = logging.getLogger(__name__)

from curio import tcp_server

from .config import TCP, UDP
from .connection import Connection, bind_datagram
from .errors import ConfigurationError, ConnectionFailed
from .transfer import Counter, transfer_loop
from .units import byte_label


class ServerRun(object):
    '''
    Accepts connections forever, running a receive loop on each.
    '''
    def __init__(self, config):
        self.config = config

    async def run(self):
        if self.config.transport == TCP:
            await self._serve_stream()
        elif self.config.transport == UDP:
            await self._serve_datagram()
        else:
            raise ConfigurationError(f'unknown transport {self.config.transport!r}')

    async def drain(self, conn):
        '''
        Read from conn until end-of-stream or error.  Returns the number
        of bytes received.
        '''
        log.info('Reading from connection %s', conn.peer)
        counter = Counter()
        try:
            await transfer_loop(conn, conn.read, counter, bufsize=self.config.bufsize)
        finally:
            nbytes, label = byte_label(counter.count)
            log.info('Closing connection to %s (%.2f %s received)', conn.peer, nbytes, label)
        return counter.count

    async def _serve_stream(self):
        async def handler(client, addr):
            conn = Connection(client, TCP, addr)
            if self.config.window > 0:
                conn.set_buffer_size(self.config.window)
            await self.drain(conn)

        log.info('Listening on tcp %s:%d', self.config.host, self.config.port)
        try:
            await tcp_server(self.config.host, self.config.port, handler)
        except OSError as e:
            raise ConnectionFailed(f'tcp {self.config.host}:{self.config.port}: {e}') from e

    async def _serve_datagram(self):
        log.info('Listening on udp %s:%d', self.config.host, self.config.port)
        # A datagram socket has no accept().  If its loop ever ends, bind again.
        while True:
            conn = await bind_datagram(self.config.host, self.config.port)
            if self.config.window > 0:
                conn.set_buffer_size(self.config.window)
            await self.drain(conn)
