"""
debtsolver — погашение сети попарных долгов минимальным набором платежей.

Пример:
    >>> from debtsolver import Ledger, Transaction
    >>> ledger = Ledger()
    >>> ledger.add_transaction(Transaction.of("Alice", "Bob", 20))
    >>> ledger.add_transaction(Transaction.of("Bob", "Charlie", 20))
    >>> [str(p) for p in ledger.settle()]
    ['Alice owes Charlie 20.00 USD']
"""

from debtsolver.core.domain import MultiPartyTransaction, Transaction
from debtsolver.core.errors import (
    AllocationError,
    AmountParseError,
    CurrencyMismatchError,
    DebtSolverError,
    InvalidAmountError,
    UnbalancedLedgerError,
    UnknownCurrencyError,
)
from debtsolver.core.money import (
    Amount,
    Currency,
    allocate,
    allocate_evenly,
    parse_amount,
)
from debtsolver.ledger import Ledger
from debtsolver.settlement import SettlementConfig, SettlementEngine, SettlementResult

__all__ = [
    # Money
    "Amount",
    "Currency",
    "allocate",
    "allocate_evenly",
    "parse_amount",
    # Transactions
    "Transaction",
    "MultiPartyTransaction",
    # Ledger / settlement
    "Ledger",
    "SettlementConfig",
    "SettlementEngine",
    "SettlementResult",
    # Errors
    "DebtSolverError",
    "InvalidAmountError",
    "CurrencyMismatchError",
    "UnknownCurrencyError",
    "AmountParseError",
    "AllocationError",
    "UnbalancedLedgerError",
]
