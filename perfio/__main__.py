# perfio/__main__.py
#
# Command line interface.
#
#   python -m perfio -s                  # server
#   python -m perfio -c 10.0.0.1 -P 4    # client, four parallel streams

import argparse
import logging
import sys

import curio

from .config import make_config, CLIENT, SERVER, TCP, UDP, DEFAULT_PORT
from .client import ClientRun
from .server import ServerRun
from .errors import ConfigurationError, ConnectionFailed

log = logging.getLogger('perfio')

LOG_FORMAT = '%(asctime)s %(filename)s:%(lineno)d: %(message)s'


def make_parser():
    parser = argparse.ArgumentParser(
        prog='perfio',
        description='Measure TCP or UDP throughput between two hosts')

    role = parser.add_mutually_exclusive_group(required=True)
    role.add_argument('-s', '--server', action='store_true',
                      help='run as server')
    role.add_argument('-c', '--client', metavar='HOST',
                      help='connect as client to HOST')

    parser.add_argument('-u', '--udp', action='store_true',
                        help='use UDP instead of TCP')
    parser.add_argument('-l', '--len', dest='bufsize', default=None,
                        help='buffer size, e.g. 128K (default 128K for tcp, 8K for udp)')
    parser.add_argument('-p', '--port', type=int, default=DEFAULT_PORT,
                        help='port (default %(default)s)')
    parser.add_argument('-f', '--format', default='a',
                        help='[kmgtKMGTa] report format, a = automatic (default)')
    parser.add_argument('-w', '--window', default='0',
                        help='socket buffer size (default: OS setting)')
    parser.add_argument('-t', '--time', dest='duration', type=float, default=10,
                        help='duration in seconds, 0 = until interrupted (default %(default)s)')
    parser.add_argument('-i', '--interval', type=float, default=1,
                        help='report interval in seconds, 0 = none (default %(default)s)')
    parser.add_argument('-P', '--parallel', type=int, default=1,
                        help='number of parallel client streams (default %(default)s)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='debug logging')
    return parser


def config_from_args(args):
    if args.server:
        role, host = SERVER, ''
    else:
        role, host = CLIENT, args.client
    return make_config(
        role,
        transport=UDP if args.udp else TCP,
        host=host,
        port=args.port,
        bufsize=args.bufsize,
        window=args.window,
        duration=args.duration,
        interval=args.interval,
        parallel=args.parallel,
        format=args.format,
    )


def make_run(config):
    '''
    Return the ClientRun or ServerRun for config.
    '''
    if config.role == SERVER:
        return ServerRun(config)
    return ClientRun(config)


def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format=LOG_FORMAT)

    try:
        config = config_from_args(args)
    except ConfigurationError as e:
        parser.error(str(e))

    try:
        curio.run(make_run(config).run)
    except ConnectionFailed as e:
        log.error('%s', e)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == '__main__':
    sys.exit(main())
