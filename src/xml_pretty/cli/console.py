"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``, usage
diagnostics) remain functional even when Rich is not installed.

Everything printed here goes to stderr; standard output is reserved
for the formatted document.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from xml_pretty.exceptions import EnvironmentError

_MARKUP_TAG = re.compile(r"\[/?(?:bold red|yellow|dim)\]")


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr.

	Soft wrapping keeps long file paths on a single line.
	"""
	console_class = _load_rich_console_class()
	return console_class(stderr=True, highlight=False, soft_wrap=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*(_MARKUP_TAG.sub("", str(obj)) for obj in objects), file=sys.stderr)
			return
		rich_console.print(*objects)

	def error(self, label: str, message: str, hint: str | None = None) -> None:
		"""Print ``label: message`` and an optional hint line.

		*message* and *hint* are user data (paths, parser output) and are
		never interpreted as markup.
		"""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(f"{label}: {message}", file=sys.stderr)
			if hint:
				print(f"Hint: {hint}", file=sys.stderr)
			return

		from rich.markup import escape

		rich_console.print(f"[bold red]{label}:[/bold red] {escape(message)}")
		if hint:
			rich_console.print(f"[yellow]Hint:[/yellow] {escape(hint)}")


console = _ConsoleProxy()
