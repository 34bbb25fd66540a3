"""
Logging helpers for glint.

glint's stdout is captured by the shell and spliced into the prompt, so
any log line written there would end up inside PS1. Records therefore
always go to stderr, and stay at WARNING unless -v is given.
"""

from __future__ import annotations

import logging
import sys

_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def configure_logging(verbosity: int) -> None:
    """
    Route glint's log records to stderr at the level chosen by -v.

    No flag keeps warnings only, -v adds progress messages (for example
    falling back to the alternate format) and -vv adds parser traces.
    """

    level = _LEVELS[max(0, min(verbosity, len(_LEVELS) - 1))]
    logging.basicConfig(
        level=level,
        format="glint %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
