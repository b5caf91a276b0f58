import logging
from socket import gaierror as sock_gaierror, error as sock_error

from gevent import socket, get_hub
from gevent.select import select
from ssh2.session import Session, LIBSSH2_SESSION_BLOCK_INBOUND, \
    LIBSSH2_SESSION_BLOCK_OUTBOUND
from ssh2.error_codes import LIBSSH2_ERROR_EAGAIN
from ssh2.exceptions import SSH2Error, AgentError, AuthenticationError

from fgssh.clients.base import RemoteSession
from fgssh.exceptions import SessionError, UnknownHostException, \
    ConnectionErrorException, AuthenticationException

THREAD_POOL = get_hub().threadpool
DEFAULT_PORT = 22

logger = logging.getLogger(__name__)


def split_address(address, default_user, default_port=DEFAULT_PORT):
    """[user@]host[:port] -> (user, host, port)"""
    user = default_user
    port = default_port
    host = address
    if '@' in host:
        user, host = host.split('@', 1)
    if host.count(':') == 1:
        host, port = host.rsplit(':', 1)
        port = int(port)
    return user, host, port


class ChannelStream:
    """Line reader over one libssh2 channel stream in non-blocking mode."""

    def __init__(self, client, read_func):
        self.client = client
        self._read = read_func
        self._buffer = b""
        self._eof = False

    def readline(self):
        while True:
            idx = self._buffer.find(b"\n")
            if idx >= 0:
                line = self._buffer[:idx + 1]
                self._buffer = self._buffer[idx + 1:]
                return line
            if self._eof:
                line, self._buffer = self._buffer, b""
                return line
            self._fill()

    def _fill(self):
        size, data = self._read()
        while size == LIBSSH2_ERROR_EAGAIN:
            self.client.wait_socket()
            size, data = self._read()
        if size < 0:
            raise OSError(size, f"libssh2 read error on {self.client.address}")
        if size == 0:
            self._eof = True
        else:
            self._buffer += data

    def close(self):
        self._buffer = b""
        self._eof = True


class NativeSession(RemoteSession):
    """Run the command over libssh2 without forking an ssh client.

    Authentication uses the running ssh agent. Host keys are not verified.
    """

    def __init__(self, username, address, command, timeout=None):
        super().__init__(username, address, command)
        self.user, self.host, self.port = split_address(address, username)
        self.timeout = timeout
        self.sock = None
        self.session = None
        self.channel = None

    def start(self):
        self._connect()
        # libssh2 阻塞调用放到线程池里，不卡住 hub
        try:
            THREAD_POOL.apply(self._init)
        except (AgentError, AuthenticationError) as ex:
            self.sock.close()
            raise AuthenticationException(
                f"Agent authentication failed for {self.user}@{self.host}: {ex}") from ex
        except SSH2Error as ex:
            self.sock.close()
            raise SessionError(f"Could not open session to {self.address}: {ex}") from ex
        self.session.set_blocking(False)
        self.stdout = ChannelStream(self, self.channel.read)
        self.stderr = ChannelStream(self, self.channel.read_stderr)

    def _connect(self):
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        if self.timeout:
            self.sock.settimeout(self.timeout)
        try:
            self.sock.connect((self.host, self.port))
        except sock_gaierror as ex:
            self.sock.close()
            raise UnknownHostException(f"Unknown host {self.host}: {ex}") from ex
        except sock_error as ex:
            self.sock.close()
            raise ConnectionErrorException(
                f"Error connecting to {self.host}:{self.port}: {ex}") from ex

    def _init(self):
        self.session = Session()
        self.session.handshake(self.sock)
        self.session.agent_auth(self.user)
        self.channel = self.session.open_session()
        self.channel.execute(self.command)
        logger.debug("Executing %r on %s@%s:%s", self.command, self.user, self.host, self.port)

    def wait_socket(self):
        directions = self.session.block_directions()
        if directions == 0:
            return
        readfds = [self.sock] if directions & LIBSSH2_SESSION_BLOCK_INBOUND else []
        writefds = [self.sock] if directions & LIBSSH2_SESSION_BLOCK_OUTBOUND else []
        select(readfds, writefds, [], self.timeout)

    def _eagain(self, func, *args):
        ret = func(*args)
        while ret == LIBSSH2_ERROR_EAGAIN:
            self.wait_socket()
            ret = func(*args)
        return ret

    def join(self):
        self._eagain(self.channel.close)
        self._eagain(self.channel.wait_closed)
        exit_code = self.channel.get_exit_status()
        self.disconnect()
        return exit_code

    def disconnect(self):
        if self.session is not None:
            self._eagain(self.session.disconnect)
            self.session = None
        if self.sock is not None:
            self.sock.close()
            self.sock = None
