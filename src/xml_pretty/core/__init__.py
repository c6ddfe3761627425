"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or stream I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from xml_pretty.core.format_service import FormatService
from xml_pretty.core.models import (
    EntityMode,
    FormatConfig,
    HelpRequested,
    InputSource,
    InvocationArguments,
    OutputTarget,
    ResolvedRequest,
    UsageDiagnostic,
)
from xml_pretty.core.protocols import DocumentStore, PrettyPrinter
from xml_pretty.core.resolver import build_config, resolve_request

__all__: list[str] = [
    "DocumentStore",
    "EntityMode",
    "FormatConfig",
    "FormatService",
    "HelpRequested",
    "InputSource",
    "InvocationArguments",
    "OutputTarget",
    "PrettyPrinter",
    "ResolvedRequest",
    "UsageDiagnostic",
    "build_config",
    "resolve_request",
]
