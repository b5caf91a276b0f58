import logging
from functools import partial

import gevent

from fgssh.clients.openssh import SshSession
from fgssh.group import ExecutionGroup, clamp_cap

logger = logging.getLogger(__name__)


def make_session_factory(opts):
    if opts.native:
        # ssh2 只在需要时导入
        from fgssh.clients.native import NativeSession
        return NativeSession
    return partial(SshSession, strict=opts.strict, options=opts.ssh_options)


class Manager:
    """Drives the spawn loop over the host list."""

    def __init__(self, opts, console, session_factory=None, width=0):
        self.opts = opts
        self.console = console
        self.session_factory = session_factory or make_session_factory(opts)
        self.width = width
        self.hosts = []
        self.group = None

    def add_host(self, address):
        self.hosts.append(address)
        self.width = max(self.width, len(address))

    @property
    def limit(self):
        if not self.hosts:
            return 0
        return clamp_cap(self.opts.procs, len(self.hosts))

    def run(self):
        """Spawn a session per host, at most `limit` at a time.

        Returns the RemoteHost records in spawn order once every session
        has finished.
        """
        if not self.hosts:
            return []
        limit = self.limit
        self.group = ExecutionGroup(len(self.hosts), self.console,
                                    self.session_factory, self.width)
        for address in self.hosts:
            self.group.spawn(self.opts.user, address, self.opts.command)
            self.group.update_progress()
            # 控制 fork 速度，不影响正确性
            gevent.sleep(self.opts.delay / 1000.0)
            self.group.wait(limit)

        self.group.wait(0)
        self.group.clear_progress()
        logger.debug("All %d sessions finished", self.group.complete)
        return self.group.servers
