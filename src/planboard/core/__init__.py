"""Core package initializer for planboard.

Downstream code imports from the submodules directly, e.g.:
    from planboard.core.settings import load_settings, get_logger
    from planboard.core.state.temporal import TemporalLog
"""

from __future__ import annotations

__all__ = ["__doc__"]
