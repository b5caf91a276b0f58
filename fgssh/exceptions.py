

class ConfigError(Exception):
    """Raised on invalid options before any session is started"""
    pass


class SessionError(Exception):
    """Raised when a remote session cannot be started"""
    pass


class UnknownHostException(SessionError):
    """Raised when a host is unknown (dns failure)"""
    pass


class ConnectionErrorException(SessionError):
    """Raised on error connecting (connection refused/timed out)"""
    pass


class AuthenticationException(SessionError):
    """Raised on authentication error (agent has no usable key)"""
    pass
