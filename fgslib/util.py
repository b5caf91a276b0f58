import sys


def read_hosts(lines):
    """
    :param lines: iterable of text lines
    :return: (hosts, width), hosts in file order and the length of the
             longest entry, used to right align addresses
    """
    hosts = []
    width = 0
    for line in lines:
        line = line.strip()
        # 删除空行和注释
        if not line or line.startswith("#"):
            continue
        width = max(width, len(line))
        hosts.append(line)
    return hosts, width


def read_host_file(path):
    """Read a host list from `path`, "-" reads standard input."""
    if path == "-":
        return read_hosts(sys.stdin)
    with open(path, 'r') as f:
        return read_hosts(f)
