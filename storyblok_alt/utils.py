"""Small string helpers."""

from __future__ import annotations

from typing import Optional


def is_blank(value: Optional[str]) -> bool:
    """True for ``None``, empty and whitespace-only strings."""
    return value is None or not str(value).strip()
