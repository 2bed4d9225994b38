"""
Domain models and value objects.

Transactions recorded into a Ledger and produced by the settlement engine.
"""

from debtsolver.core.domain.transaction import MultiPartyTransaction, Transaction

__all__ = [
    "Transaction",
    "MultiPartyTransaction",
]
