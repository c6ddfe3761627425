"""Shared pytest fixtures and configuration for the xml-pretty test suite.

Guidelines
----------
* No test reads from the real terminal; standard input is always
  replaced or the terminal probe is stubbed.
* Core tests must be pure — collaborators are mocked at the protocol
  boundary.
* Filesystem work happens under ``tmp_path`` only.
"""

from __future__ import annotations

import io
import logging
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from xml_pretty.utils.logging_config import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Iterator[None]:
    """Undo handler and level changes made by ``setup_logging`` in a test."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved = (logger.handlers[:], logger.level, logger.propagate)
    yield
    logger.handlers, logger.level, logger.propagate = saved


@pytest.fixture()
def write_xml(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing *content* to ``tmp_path / name``."""

    def _write(content: str | bytes, name: str = "a.xml") -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_bytes(content)
        return path

    return _write


@pytest.fixture()
def piped_stdin(monkeypatch: pytest.MonkeyPatch) -> Callable[[bytes], None]:
    """Return a function that replaces ``sys.stdin`` with piped bytes."""

    def _pipe(data: bytes) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))

    return _pipe
