import io
import unittest

from fgssh.drainer import STDOUT, STDERR, format_line
from fgslib.console import Console, progress_text


def screen(output):
    """What a terminal shows after `output`, one string per row."""
    rows = []
    row = []
    col = 0
    for ch in output:
        if ch == "\r":
            col = 0
        elif ch == "\n":
            rows.append("".join(row).rstrip())
            row = []
            col = 0
        else:
            if col < len(row):
                row[col] = ch
            else:
                row.append(ch)
            col += 1
    rows.append("".join(row).rstrip())
    return rows


class ProgressTest(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.console = Console(self.stream, colors=False, progress=True)

    def test_progress_text(self):
        self.assertEqual("[1/3] 33.33% complete", progress_text(1, 3))
        self.assertEqual("[3/3] 100.00% complete", progress_text(3, 3))

    def test_clear_erases_line(self):
        self.console.render_progress(1, 2)
        self.console.clear_progress()
        self.assertEqual([""], screen(self.stream.getvalue()))

    def test_clear_and_render_twice_same_as_once(self):
        self.console.clear_progress()
        self.console.render_progress(2, 7)
        once = screen(self.stream.getvalue())
        self.console.clear_progress()
        self.console.render_progress(2, 7)
        self.assertEqual(once, screen(self.stream.getvalue()))
        self.assertEqual([progress_text(2, 7)], once)

    def test_output_replaces_progress(self):
        self.console.render_progress(0, 4)
        with self.console.lock:
            self.console.clear_progress()
            self.console.write_output("a", 1, "hello", STDOUT)
            self.console.render_progress(1, 4)
        self.assertEqual([" a -> hello", "[1/4] 25.00% complete"],
                         screen(self.stream.getvalue()))

    def test_no_progress_on_plain_stream(self):
        console = Console(self.stream, colors=False)
        console.render_progress(1, 2)
        console.clear_progress()
        self.assertEqual("", self.stream.getvalue())


class OutputTest(unittest.TestCase):

    def test_format_line_padding(self):
        self.assertEqual("   a -> ok", format_line("a", 3, "ok"))
        self.assertEqual(" ccc -> ok", format_line("ccc", 3, "ok"))

    def test_colored_arrows(self):
        stream = io.StringIO()
        console = Console(stream, colors=True, progress=False)
        console.write_output("a", 1, "out", STDOUT)
        console.write_output("a", 1, "err", STDERR)
        out, err = stream.getvalue().splitlines()
        self.assertEqual(" a \033[01;32m->\033[0m out", out)
        self.assertEqual(" a \033[01;31m->\033[0m err", err)


if "__main__" == __name__:
    unittest.main(verbosity=2)
