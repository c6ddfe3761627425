"""Allow ``python -m xml_pretty`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m xml_pretty`` behaves identically to the ``xml-pretty``
console script.
"""

from __future__ import annotations

from xml_pretty.cli.app import cli

if __name__ == "__main__":
    cli()
