
def with_color(string, fg, bold=False):
    prefix = f"01;{fg}" if bold else str(fg)
    return f"\033[{prefix}m{string}\033[0m"


def r(string, bold=False): return with_color(string, 31, bold) # Red
def g(string, bold=False): return with_color(string, 32, bold) # Green


# Python cookbook #475186
def has_colors(stream):
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    try:
        import curses
    except ImportError:
        return False
    try:
        curses.setupterm()
        return curses.tigetnum("colors") > 2
    except curses.error:
        return False
