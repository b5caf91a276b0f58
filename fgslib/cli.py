import argparse
import logging
import os
import sys

from fgssh import __version__, host_logger
from fgssh.exceptions import ConfigError, SessionError
from fgssh.stats import aggregate
from fgslib import util
from fgslib.config import make_options, DEFAULT_USER, DEFAULT_DELAY, DEFAULT_PROCS
from fgslib.console import Console
from fgslib.manager import Manager


def common_parser():

    parser = argparse.ArgumentParser(prog="fgssh",
                                     description="group ssh: run a command on many hosts")

    parser.epilog = "Example: fgssh -f nodes.txt -l admin -p 50 uptime"
    parser.add_argument("-l", "--user", dest="user",
                        help="ssh login as this username (default: root)")
    parser.add_argument("-f", "--file", dest="host_file", metavar="HOST_FILE",
                        help="file with the list of hosts, '-' reads standard input")
    parser.add_argument("-d", "--delay", dest="delay", type=int,
                        help="delay between each ssh fork in msec (default: 10)")
    parser.add_argument("-p", "--procs", dest="procs", type=int,
                        help="number of parallel ssh processes (default: 500)")
    parser.add_argument("--strict", dest="strict", action="store_true",
                        help="strict ssh fingerprint checking (default)")
    parser.add_argument("--no-strict", dest="strict", action="store_false",
                        help="accept unknown host fingerprints")
    parser.add_argument("-L", "--logfile", dest="logfile",
                        help="save remote output in the file specified")
    parser.add_argument("-O", "--option", dest="options", action="append",
                        metavar="OPTION", help="SSH option (OPTIONAL)")
    parser.add_argument("--native", dest="native", action="store_true",
                        help="use the libssh2 client instead of forking ssh")
    parser.add_argument("--color", dest="color", action="store_true", default=None,
                        help="color output even when not on a terminal")
    parser.add_argument("-v", "--verbose", dest="verbose", action="store_true",
                        help="turn on warning and diagnostic messages (OPTIONAL)")
    parser.add_argument("command", nargs=argparse.REMAINDER,
                        help="command to execute on every host")
    return parser


def common_defaults(**kwargs):
    defaults = dict(user=DEFAULT_USER, delay=DEFAULT_DELAY, procs=DEFAULT_PROCS,
                    strict=True)
    defaults.update(**kwargs)
    env_vars = [
        ('user', 'GSSH_USER'),
        ('delay', 'GSSH_DELAY'),
        ('procs', 'GSSH_PROCS'),
        ('logfile', 'GSSH_LOGFILE'),
        ('host_file', 'GSSH_HOSTS'),
    ]

    for option, var in env_vars:
        value = os.getenv(var)
        if value:
            defaults[option] = value

    return defaults


def parse_args(argv=None):
    parser = common_parser()
    parser.set_defaults(**common_defaults())
    return parser.parse_args(argv)


def setup_logging(verbose):
    if not verbose:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    for name in ("fgssh", "fgslib"):
        log = logging.getLogger(name)
        log.addHandler(handler)
        log.setLevel(logging.DEBUG)


def open_log_sink(path):
    """Send host output lines to `path` through the host logger."""
    try:
        handler = logging.FileHandler(path, mode="w")
    except OSError as ex:
        raise ConfigError(f"Could not open log file {path}: {ex.strerror}") from ex
    handler.setFormatter(logging.Formatter("%(message)s"))
    host_logger.addHandler(handler)
    host_logger.setLevel(logging.INFO)
    return handler


def close_log_sink(handler):
    host_logger.removeHandler(handler)
    handler.close()


def print_banner(console, opts, count, limit):
    console.write(f"gssh - group ssh, ver. {__version__}\n\n")
    console.write(f"  [*] read ({count}) hosts from the list\n")
    console.write(f"  [*] executing '{opts.command}' as user '{opts.user}'\n")
    console.write(f"  [*] spawning {limit} parallel ssh sessions\n\n")


def print_summary(console, count, stats):
    console.write("\n")
    console.write(f"  Done. {count} hosts processed.\n")
    console.write(f"  [*] stdout: {stats.stdout_hosts} hosts, {stats.stdout_lines} lines\n")
    console.write(f"  [*] stderr: {stats.stderr_hosts} hosts, {stats.stderr_lines} lines\n")
    console.write(f"  [*] output: {stats.output_hosts} hosts, {stats.output_lines} lines\n")
    if stats.failed_hosts:
        console.write(f"  [*] failed: {stats.failed_hosts} hosts\n")


def do_gssh(opts, console=None, session_factory=None):
    """Run `opts.command` on every host of `opts.host_file`.

    Returns the aggregated Stats. Raises ConfigError or SessionError on a
    fatal problem.
    """
    if console is None:
        console = Console(colors=opts.color)
    try:
        hosts, width = util.read_host_file(opts.host_file)
    except OSError as ex:
        raise ConfigError(f"Could not open hosts file: {ex.strerror}") from ex

    sink = open_log_sink(opts.logfile) if opts.logfile else None
    try:
        manager = Manager(opts, console, session_factory, width)
        for address in hosts:
            manager.add_host(address)

        print_banner(console, opts, len(hosts), manager.limit)
        servers = manager.run()
        stats = aggregate(servers)
        print_summary(console, len(hosts), stats)
    finally:
        if sink:
            close_log_sink(sink)
    return stats


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose)
    try:
        opts = make_options(args)
        do_gssh(opts)
    except (ConfigError, SessionError) as ex:
        sys.stderr.write(f"fgssh: {ex}\n")
        return 1
    return 0
