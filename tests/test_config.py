# test_config.py

import pytest

from perfio import *


def test_defaults():
    config = make_config()
    assert config.role == CLIENT
    assert config.transport == TCP
    assert config.host == DEFAULT_HOST
    assert config.port == DEFAULT_PORT
    assert config.bufsize == 128000
    assert config.window == 0
    assert config.duration == 10
    assert config.interval == 1
    assert config.parallel == 1
    assert config.unit is AUTO


def test_udp_default_bufsize():
    assert make_config(transport=UDP).bufsize == 8000


def test_server_binds_all_interfaces():
    assert make_config(SERVER).host == ''


def test_sizes_with_suffix():
    config = make_config(bufsize='64K', window='1M', format='m')
    assert config.bufsize == 64000
    assert config.window == 1000000
    assert config.unit == Unit(1.25e5, 'mbps')


def test_config_is_immutable():
    config = make_config()
    with pytest.raises(AttributeError):
        config.bufsize = 1
    assert config._replace(bufsize=1).bufsize == 1
    assert config.bufsize == 128000


@pytest.mark.parametrize('options', [
    dict(role='bogus'),
    dict(transport='sctp'),
    dict(bufsize=0),
    dict(bufsize=-10),
    dict(bufsize='12X'),
    dict(window=-1),
    dict(parallel=0),
    dict(parallel=-2),
    dict(duration=-1),
    dict(interval=-0.5),
    dict(interval='soon'),
    dict(format='q'),
    dict(port=70000),
])
def test_invalid_options(options):
    with pytest.raises(ConfigurationError):
        make_config(**options)
