"""xml-pretty — canonical, human-readable XML formatting.

Built on lxml with a strict layered architecture.
"""

from xml_pretty.version import __version__

__all__: list[str] = ["__version__"]
