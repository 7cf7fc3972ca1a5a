# perfio/connection.py
#
# Connections and the functions that make them.  Everything about
# sockets lives here.  The rest of perfio only sees a Connection
# with read(), write() and close().

__all__ = [
    'Connection', 'open_stream', 'open_datagram', 'bind_datagram',
    'connection_factory',
]

import logging
log = logging.getLogger(__name__)

from curio import socket, open_connection

from .config import TCP, UDP
from .errors import ConfigurationError, ConnectionFailed, EndOfStream

# Errors on write that mean the peer has gone away
_PEER_GONE = (BrokenPipeError, ConnectionResetError)


class Connection(object):
    '''
    A connected curio socket carrying raw measurement bytes.  For a
    stream transport a zero-byte read means end-of-stream.  Datagram
    transports never see end-of-stream on read.
    '''
    __slots__ = ('_sock', 'transport', 'peer')

    def __init__(self, sock, transport, peer=None):
        self._sock = sock
        self.transport = transport
        self.peer = peer

    def __repr__(self):
        return f'<Connection {self.transport} {self.peer!r}>'

    async def read(self, buffer):
        nbytes = await self._sock.recv_into(buffer)
        if not nbytes and self.transport == TCP:
            raise EndOfStream(f'{self.peer!r} closed')
        return nbytes

    async def write(self, buffer):
        try:
            return await self._sock.send(buffer)
        except _PEER_GONE as e:
            raise EndOfStream(f'{self.peer!r} closed') from e

    def set_buffer_size(self, nbytes):
        '''
        Set the OS send and receive buffer sizes.
        '''
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_SNDBUF, nbytes)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF, nbytes)

    async def close(self):
        await self._sock.close()


async def open_stream(host, port):
    '''
    Create a TCP connection to a given host and port.
    '''
    try:
        sock = await open_connection(host, port)
    except OSError as e:
        raise ConnectionFailed(f'tcp {host}:{port}: {e}') from e
    return Connection(sock, TCP, (host, port))


async def open_datagram(host, port):
    '''
    Create a UDP socket connected to a given host and port.
    '''
    try:
        infos = await socket.getaddrinfo(host, port, 0, socket.SOCK_DGRAM)
    except OSError as e:
        raise ConnectionFailed(f'udp {host}:{port}: {e}') from e

    family, socktype, proto, _, address = infos[0]
    sock = socket.socket(family, socktype, proto)
    try:
        await sock.connect(address)
    except OSError as e:
        await sock.close()
        raise ConnectionFailed(f'udp {host}:{port}: {e}') from e
    return Connection(sock, UDP, address)


async def bind_datagram(host, port, *, reuse_address=True):
    '''
    Create a UDP socket bound to a local address for receiving.  An
    empty host binds the wildcard address.
    '''
    try:
        infos = await socket.getaddrinfo(host or None, port, 0, socket.SOCK_DGRAM,
                                         0, socket.AI_PASSIVE)
    except OSError as e:
        raise ConnectionFailed(f'udp {host}:{port}: {e}') from e

    family, socktype, proto, _, address = infos[0]
    sock = socket.socket(family, socktype, proto)
    try:
        if reuse_address:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, True)
        sock.bind(address)
    except OSError as e:
        sock._socket.close()
        raise ConnectionFailed(f'udp {host}:{port}: {e}') from e
    return Connection(sock, UDP, address)


_OPENERS = {
    TCP: open_stream,
    UDP: open_datagram,
}


def connection_factory(config):
    '''
    Return an async function that makes one ready-to-use client
    Connection for config.  Socket buffers are tuned if config.window
    is set.
    '''
    try:
        opener = _OPENERS[config.transport]
    except KeyError:
        raise ConfigurationError(f'unknown transport {config.transport!r}') from None

    async def make():
        conn = await opener(config.host, config.port)
        if config.window > 0:
            try:
                conn.set_buffer_size(config.window)
            except OSError as e:
                await conn.close()
                raise ConnectionFailed(f'{conn!r}: {e}') from e
        log.debug('Opened %r', conn)
        return conn

    return make
