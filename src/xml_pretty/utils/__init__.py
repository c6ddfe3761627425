"""Shared utilities — logging setup and cross-cutting concerns.

Rules
-----
* No business logic.
* No document I/O.
* Importable by any layer.
"""
