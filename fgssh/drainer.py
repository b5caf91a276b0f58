import logging

from fgssh import host_logger

STDOUT = "stdout"
STDERR = "stderr"

logger = logging.getLogger(__name__)


def format_line(address, width, line, arrow="->"):
    """Right align `address` to `width` plus one column and label `line` with it."""
    padding = " " * (width - len(address) + 1)
    return f"{padding}{address} {arrow} {line}"


class OutputDrainer:
    """Reads one output stream of a session until end-of-stream.

    Every line is written to the console labeled with the host address,
    copied to the host logger and counted on the host record. A read error
    marks the host as failed and ends the drain, the rest of the group
    keeps running.
    """

    def __init__(self, group, host, stream, kind):
        self.group = group
        self.host = host
        self.stream = stream
        self.kind = kind

    def run(self):
        try:
            for line in iter(self.stream.readline, b""):
                self.handle_line(line)
        except OSError as ex:
            self.host.error = f"{self.kind} read error: {ex}"
            logger.warning("Error reading %s of %s: %s", self.kind, self.host.address, ex)
            # 不再读了就关掉，仍在写的子进程收到 SIGPIPE 退出
            self.stream.close()

    def handle_line(self, line):
        text = line.decode("utf-8", "replace")
        # 最后一行没有换行符也照样输出并计数
        if text.endswith("\n"):
            text = text[:-1]
        console = self.group.console
        with console.lock:
            console.clear_progress()
            console.write_output(self.host.address, self.group.width, text, self.kind)
            host_logger.info(format_line(self.host.address, self.group.width, text))
            if self.kind == STDOUT:
                self.host.stdout_lines += 1
            else:
                self.host.stderr_lines += 1
            self.group.update_progress()
