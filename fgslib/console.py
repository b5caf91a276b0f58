import sys

from gevent.lock import RLock

from fgslib import color
from fgssh.drainer import STDERR, format_line


def progress_text(complete, total):
    return f"[{complete}/{total}] {complete * 100 / total:.2f}% complete"


class Console:
    """The shared terminal.

    Output lines and the progress line are written under one lock so a
    progress redraw never lands in the middle of an output line. The
    progress line is redrawn in place with carriage returns, on a stream
    that is not a terminal it is not drawn at all.
    """

    def __init__(self, stream=None, colors=None, progress=None):
        self.stream = stream if stream is not None else sys.stdout
        if colors is None:
            colors = color.has_colors(self.stream)
        if progress is None:
            progress = hasattr(self.stream, "isatty") and self.stream.isatty()
        self.colors = colors
        self.progress = progress
        self.lock = RLock()
        # 当前进度行占用的列数，0 表示没有进度行
        self._shown = 0

    def write(self, text):
        with self.lock:
            self.stream.write(text)
            self.stream.flush()

    def write_output(self, address, width, line, kind):
        arrow = "->"
        if self.colors:
            paint = color.r if kind == STDERR else color.g
            arrow = paint(arrow, bold=True)
        self.write(format_line(address, width, line, arrow) + "\n")

    def clear_progress(self):
        with self.lock:
            if not self._shown:
                return
            self.stream.write(f"\r{' ' * self._shown}\r")
            self.stream.flush()
            self._shown = 0

    def render_progress(self, complete, total):
        if not self.progress:
            return
        text = progress_text(complete, total)
        with self.lock:
            self.stream.write(text)
            self.stream.flush()
            self._shown = len(text)
