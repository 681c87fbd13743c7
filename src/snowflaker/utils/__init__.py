"""Utility helpers for snowflaker."""

from snowflaker.utils.decorators import traced

__all__ = [
    "traced",
]
