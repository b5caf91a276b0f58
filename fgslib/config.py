from collections import namedtuple

from fgssh.exceptions import ConfigError

DEFAULT_USER = "root"
DEFAULT_DELAY = 10
DEFAULT_PROCS = 500

Options = namedtuple("Options", [
    "command",
    "user",
    "host_file",
    "delay",
    "procs",
    "strict",
    "logfile",
    "ssh_options",
    "native",
    "verbose",
    "color",
])


def make_options(args):
    """Validate parsed command line arguments and freeze them.

    Raises ConfigError on the first problem found.
    """
    command = " ".join(args.command or []).strip()
    if not command:
        raise ConfigError("Missing command.")
    if not args.host_file:
        raise ConfigError("No serverlist file.")
    delay = int(args.delay)
    if delay < 0:
        raise ConfigError(f"Invalid delay: {delay}")
    procs = int(args.procs)
    if procs < 1:
        raise ConfigError(f"Invalid number of parallel sessions: {procs}")
    if args.native and args.strict:
        raise ConfigError("--native does not verify host keys, use it with --no-strict")

    return Options(
        command=command,
        user=args.user or DEFAULT_USER,
        host_file=args.host_file,
        delay=delay,
        procs=procs,
        strict=bool(args.strict),
        logfile=args.logfile,
        ssh_options=tuple(args.options or ()),
        native=bool(args.native),
        verbose=bool(args.verbose),
        color=args.color,
    )
