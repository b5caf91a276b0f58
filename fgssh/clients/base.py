

class RemoteSession:
    """One command running on one host.

    After `start()` the session exposes two readable byte streams,
    `stdout` and `stderr`, supporting `readline()`. `join()` blocks until
    the remote command has exited and returns its exit status.
    """

    def __init__(self, username, address, command):
        self.username = username
        self.address = address
        self.command = command
        self.stdout = None
        self.stderr = None

    def start(self):
        raise NotImplementedError

    def join(self):
        raise NotImplementedError
