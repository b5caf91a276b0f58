import logging

from gevent import subprocess

from fgssh.clients.base import RemoteSession
from fgssh.exceptions import SessionError

logger = logging.getLogger(__name__)


class ProcessSession(RemoteSession):
    """Session backed by a local child process.

    Subclasses build the argument vector in `make_args()`.
    """

    def __init__(self, username, address, command):
        super().__init__(username, address, command)
        self.proc = None

    def make_args(self):
        raise NotImplementedError

    def start(self):
        args = self.make_args()
        logger.debug("Starting %s", args)
        # stdin 接 /dev/null，否则几百个 ssh 会抢终端输入
        try:
            self.proc = subprocess.Popen(args, stdin=subprocess.DEVNULL,
                                         stdout=subprocess.PIPE,
                                         stderr=subprocess.PIPE,
                                         close_fds=True)
        except OSError as ex:
            raise SessionError(f"Could not start session to {self.address}: {ex}") from ex
        self.stdout = self.proc.stdout
        self.stderr = self.proc.stderr

    def join(self):
        # 先关管道：读出错后还在写的子进程会收到 SIGPIPE，而不是卡在写上
        for stream in (self.stdout, self.stderr):
            stream.close()
        return self.proc.wait()


class SshSession(ProcessSession):
    """Run the command through the OpenSSH client.

    Authentication is left to the agent; password, GSSAPI and host based
    authentication are disabled so a session never waits on a prompt.
    """

    def __init__(self, username, address, command, strict=True, options=()):
        super().__init__(username, address, command)
        self.strict = strict
        self.options = list(options)

    def make_args(self):
        strict = "StrictHostKeyChecking=yes" if self.strict else "StrictHostKeyChecking=no"
        args = [
            "ssh", "-A",
            "-o", "PasswordAuthentication=no",
            "-o", strict,
            "-o", "GSSAPIAuthentication=no",
            "-o", "HostbasedAuthentication=no",
        ]
        for opt in self.options:
            args += ["-o", opt]
        args += ["-l", self.username, self.address]
        # 命令原样交给远程 shell，不做转义
        args.append(self.command)
        return args
