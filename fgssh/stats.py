from collections import namedtuple

Stats = namedtuple("Stats", [
    "stdout_hosts", "stdout_lines",
    "stderr_hosts", "stderr_lines",
    "output_hosts", "output_lines",
    "failed_hosts",
])


def aggregate(servers):
    """Sum the per host line counters once the group has drained."""
    stdout_hosts = stdout_lines = 0
    stderr_hosts = stderr_lines = 0
    output_hosts = output_lines = 0
    failed_hosts = 0
    for host in servers:
        if host.stdout_lines > 0:
            stdout_hosts += 1
            stdout_lines += host.stdout_lines
        if host.stderr_lines > 0:
            stderr_hosts += 1
            stderr_lines += host.stderr_lines
        if host.stdout_lines > 0 or host.stderr_lines > 0:
            output_hosts += 1
            output_lines += host.stdout_lines + host.stderr_lines
        if host.error:
            failed_hosts += 1
    return Stats(stdout_hosts, stdout_lines, stderr_hosts, stderr_lines,
                 output_hosts, output_lines, failed_hosts)
