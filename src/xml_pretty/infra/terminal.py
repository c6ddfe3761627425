"""Infrastructure: terminal detection for standard input.

The resolver never calls ``isatty`` itself; it receives
:func:`stdin_is_interactive` as a capability so tests can substitute a
fixed answer.
"""

from __future__ import annotations

import sys


def stdin_is_interactive() -> bool:
    """Return ``True`` when no document can be piped in on standard input.

    That is the case when standard input is attached to a terminal, or
    when the process has no standard input stream at all.
    """
    stream = sys.stdin
    if stream is None:
        return True
    try:
        return stream.isatty()
    except ValueError:
        # Closed stream.
        return True
