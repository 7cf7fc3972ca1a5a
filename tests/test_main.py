# test_main.py

import socket

import pytest

from perfio import *
from perfio.__main__ import make_parser, config_from_args, make_run, main


def parse(*argv):
    return config_from_args(make_parser().parse_args(argv))


def test_client_args():
    config = parse('-c', '10.0.0.1', '-u', '-l', '4K', '-p', '5001', '-f', 'm',
                   '-w', '256K', '-t', '30', '-i', '2', '-P', '4')
    assert config == Config(role=CLIENT, transport=UDP, host='10.0.0.1', port=5001,
                            bufsize=4000, window=256000, duration=30.0,
                            interval=2.0, parallel=4, unit=get_unit('m'))
    assert isinstance(make_run(config), ClientRun)


def test_server_args():
    config = parse('-s')
    assert config.role == SERVER
    assert config.host == ''
    assert config.bufsize == 128000
    assert isinstance(make_run(config), ServerRun)


def test_role_required(capsys):
    with pytest.raises(SystemExit) as e:
        main([])
    assert e.value.code == 2

    with pytest.raises(SystemExit) as e:
        main(['-s', '-c', 'localhost'])
    assert e.value.code == 2


@pytest.mark.parametrize('argv', [
    ['-c', 'localhost', '-f', 'x'],
    ['-c', 'localhost', '-l', '0'],
    ['-c', 'localhost', '-P', '0'],
    ['-c', 'localhost', '-l', 'lots'],
])
def test_configuration_errors(argv, capsys):
    with pytest.raises(SystemExit) as e:
        main(argv)
    assert e.value.code == 2
    assert 'perfio: error:' in capsys.readouterr().err


def test_connection_failure(portno):
    assert main(['-c', '127.0.0.1', '-p', str(portno), '-t', '0.1']) == 1


def test_server_listen_failure(portno):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(('', portno))
        busy.listen(1)
        assert main(['-s', '-p', str(portno)]) == 1
