"""Single source of truth for the xml-pretty version string."""

__version__: str = "0.3.0"
