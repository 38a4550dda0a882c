# ABOUTME: Main package for the trifecta affiliate network edge dispatcher.
# ABOUTME: Exports settings access and the package version.

__version__ = "0.1.0"

from trifecta_edge.config import get_settings  # noqa: E402

__all__ = [
    "__version__",
    "get_settings",
]
