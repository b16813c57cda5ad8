"""History presentation: change descriptions, the label cache and the panel model."""

from __future__ import annotations

from .cache import MISSING_LABEL, DescriptionCache
from .describe import describe, truncate_name
from .panel import HistoryPanel, HistoryRow

__all__ = [
    "DescriptionCache",
    "HistoryPanel",
    "HistoryRow",
    "MISSING_LABEL",
    "describe",
    "truncate_name",
]
