"""Core package initializer for polydict.

Downstream code imports the pieces it needs directly:
    from polydict.core.settings import settings, load_settings, Settings, get_logger
    from polydict.core.errors import SourceReadError, ValidationGap
"""

from __future__ import annotations

__all__ = ["__doc__"]
