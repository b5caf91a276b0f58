import io
import os
import tempfile
import unittest
from unittest import mock

from fgslib import util


class ReadHostsTest(unittest.TestCase):

    def test_skips_comments_and_blank_lines(self):
        lines = ["# web servers\n", "a\n", "\n", "   \n", "  bb  \n", "  # old\n", "ccc"]
        hosts, width = util.read_hosts(lines)
        self.assertEqual(["a", "bb", "ccc"], hosts)
        self.assertEqual(3, width)

    def test_duplicates_kept(self):
        hosts, _ = util.read_hosts(["a\n", "a\n"])
        self.assertEqual(["a", "a"], hosts)

    def test_empty(self):
        self.assertEqual(([], 0), util.read_hosts([]))

    def test_read_host_file(self):
        fd, path = tempfile.mkstemp()
        with os.fdopen(fd, "w") as f:
            f.write("web1.example.com\n#web2\nweb3\n")
        self.addCleanup(os.remove, path)
        hosts, width = util.read_host_file(path)
        self.assertEqual(["web1.example.com", "web3"], hosts)
        self.assertEqual(len("web1.example.com"), width)

    def test_read_stdin(self):
        with mock.patch("sys.stdin", io.StringIO("x\nyy\n")):
            self.assertEqual((["x", "yy"], 2), util.read_host_file("-"))

    def test_missing_file(self):
        with self.assertRaises(OSError):
            util.read_host_file("/nonexistent/fgssh/hosts")


if "__main__" == __name__:
    unittest.main(verbosity=2)
