from fgssh.clients.base import RemoteSession
from fgssh.clients.openssh import ProcessSession, SshSession

__all__ = ["RemoteSession", "ProcessSession", "SshSession"]
