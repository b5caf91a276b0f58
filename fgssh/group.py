import logging

import gevent
from gevent.event import Event
from gevent.lock import Semaphore

from fgssh.drainer import OutputDrainer, STDOUT, STDERR
from fgssh.exceptions import ConfigError

logger = logging.getLogger(__name__)


class RemoteHost:
    """Per host record of one spawned session.

    Only the drainers of this host write to it. After the group is drained
    it is read only.
    """

    def __init__(self, username, address):
        self.username = username
        self.address = address
        self.stdout_lines = 0
        self.stderr_lines = 0
        self.exit_code = None
        self.error = None

    def __repr__(self):
        return (f"RemoteHost({self.username}@{self.address}, "
                f"stdout={self.stdout_lines}, stderr={self.stderr_lines})")


def clamp_cap(requested, total):
    """A cap above the number of hosts is meaningless, cut it down."""
    if requested < 1:
        raise ConfigError(f"Invalid number of parallel sessions: {requested}")
    return min(requested, total)


class ExecutionGroup:
    """Runs one session per host and keeps the shared counters.

    `active`, `complete` and `servers` are only changed while holding the
    counter lock. Console writes go through the console's own lock.
    """

    def __init__(self, total, console, session_factory, width=0):
        if total < 1:
            raise ValueError("An execution group needs at least one host")
        self.total = total
        self.active = 0
        self.complete = 0
        self.servers = []

        self.console = console
        self.session_factory = session_factory
        self.width = width

        self._lock = Semaphore()
        self._changed = Event()

    def spawn(self, username, address, command):
        """Start a session on `address` and return its RemoteHost.

        Does not wait for the session. Raises SessionError when the session
        cannot be started.
        """
        session = self.session_factory(username, address, command)
        session.start()

        host = RemoteHost(username, address)
        with self._lock:
            self.active += 1
            self.servers.append(host)
            logger.debug("Spawned %s (%d active, %d/%d complete)",
                         address, self.active, self.complete, self.total)
        gevent.spawn(self._supervise, host, session)
        return host

    def _supervise(self, host, session):
        drainers = [
            OutputDrainer(self, host, session.stdout, STDOUT),
            OutputDrainer(self, host, session.stderr, STDERR),
        ]
        try:
            gevent.joinall([gevent.spawn(drainer.run) for drainer in drainers])
            host.exit_code = session.join()
        finally:
            self._finished(host)

    def _finished(self, host):
        with self._lock:
            self.active -= 1
            self.complete += 1
            self._changed.set()
            logger.debug("Finished %s with exit code %s (%d active, %d/%d complete)",
                         host.address, host.exit_code, self.active, self.complete, self.total)
        self.update_progress()

    def wait(self, n):
        """Block until no session is active or fewer than `n` are.

        wait(0) returns only when every spawned session has finished.
        """
        while True:
            with self._lock:
                if self.active == 0 or self.active < n:
                    return
                # 在锁内清除，完成时的 set() 不会丢
                self._changed.clear()
            self._changed.wait()

    def counters(self):
        """Return an (active, complete, total) snapshot taken under the counter lock."""
        with self._lock:
            return self.active, self.complete, self.total

    def update_progress(self):
        with self.console.lock:
            _, complete, total = self.counters()
            self.console.clear_progress()
            self.console.render_progress(complete, total)

    def clear_progress(self):
        self.console.clear_progress()
