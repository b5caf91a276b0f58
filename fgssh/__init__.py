"""Group SSH: run one command on many hosts with bounded parallelism.

The output of every host is streamed to a single console, each line labeled
with the host address, while a progress line tracks completed sessions.

Start with `fgssh.group.ExecutionGroup.spawn` and
`fgssh.group.ExecutionGroup.wait`.
"""

from logging import getLogger, NullHandler

__version__ = "0.2.0"

host_logger = getLogger('fgssh.host_logger')
logger = getLogger('fgssh')
host_logger.addHandler(NullHandler())
host_logger.propagate = False
logger.addHandler(NullHandler())
