"""Page-state introspection for documents paginated in an embedded web view."""

from paginator.version import __version__

__all__ = ["__version__"]
