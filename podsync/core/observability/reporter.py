"""
Reporter — user-facing status, error and progress output.

Diagnostics go through ``logging``; text the user is meant to read
(warnings with remediation steps, echoed CocoaPods output) goes through
a Reporter.  The CLI injects ``click.echo``; the default writes to the
standard streams.
"""

from __future__ import annotations

import logging
import sys
import textwrap
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)

# echo(text, err) — err=True routes to the error stream
EchoFn = Callable[[str, bool], None]


def _default_echo(text: str, err: bool) -> None:
    stream = sys.stderr if err else sys.stdout
    stream.write(text + "\n")
    stream.flush()


class Reporter:
    """Write user-facing messages through an echo callable.

    Args:
        echo: Output function, ``echo(text, err)``.
        verbose: Whether the run was started in verbose mode.
    """

    def __init__(self, echo: EchoFn | None = None, verbose: bool = False):
        self._echo = echo or _default_echo
        self.verbose = verbose

    def status(self, text: str, indent: int = 0) -> None:
        """Print a status message, optionally indented by ``indent`` spaces."""
        if indent:
            text = textwrap.indent(text, " " * indent)
        self._echo(text, False)

    def error(self, text: str, emphasis: bool = False) -> None:
        """Print a warning or error to the error stream.

        Emphasized messages are framed by blank lines.
        """
        logger.debug("reported error: %s", text.splitlines()[0] if text else "")
        if emphasis:
            text = f"\n{text.rstrip()}\n"
        self._echo(text, True)

    @contextmanager
    def progress(self, message: str) -> Iterator[None]:
        """Show ``message`` for the duration of the block, then the elapsed time."""
        self._echo(message, False)
        start = time.monotonic()
        try:
            yield
        finally:
            elapsed = time.monotonic() - start
            self._echo(f"{message} done ({elapsed:.1f}s)", False)
