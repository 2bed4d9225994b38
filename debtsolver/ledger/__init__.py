"""Ledger — zero-sum карта чистых балансов сторон."""

from .ledger import Ledger

__all__ = [
    "Ledger",
]
