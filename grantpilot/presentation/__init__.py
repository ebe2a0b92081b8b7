"""Text rendering of matching results."""

from .formatters import (
    EMPTY_DASHBOARD,
    format_card,
    format_dashboard,
    format_detail,
    score_band,
    status_badge,
)

__all__ = [
    "EMPTY_DASHBOARD",
    "format_card",
    "format_dashboard",
    "format_detail",
    "score_band",
    "status_badge",
]
