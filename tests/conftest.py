import socket
import pytest
from curio import Kernel
from curio.debug import *

@pytest.fixture(scope='session')
def kernel(request):
    k = Kernel(debug=[longblock, logcrash])
    request.addfinalizer(lambda: k.run(shutdown=True))
    return k


# This is based on https://unix.stackexchange.com/a/132524
@pytest.fixture(scope='function')
def portno():
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(('', 0))
    _, port = s.getsockname()
    s.close()
    return port
