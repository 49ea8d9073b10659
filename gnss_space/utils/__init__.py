"""Utilities for the GPS space segment.

NOTE: Keep this package lightweight.
Avoid importing heavy/optional dependencies (matplotlib, pandas, ...) at import time.
"""

from gnss_space.utils.logging import get_logger

__all__ = ["get_logger"]
