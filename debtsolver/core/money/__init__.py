"""
Money — денежные примитивы debtsolver

Точная арифметика Decimal с тегом валюты, пропорциональное распределение
(allocate) и разбор строковых сумм.
"""

from debtsolver.core.money.amount import (
    Amount,
    allocate,
    allocate_evenly,
    allocation_quantum,
    sum_amounts,
)
from debtsolver.core.money.currency import DEFAULT_CURRENCY, MINOR_UNITS, Currency
from debtsolver.core.money.parsing import (
    DECIMAL_DELIMITER,
    THOUSANDS_SEPARATOR,
    parse_amount,
)

__all__ = [
    # Currency
    "Currency",
    "DEFAULT_CURRENCY",
    "MINOR_UNITS",
    # Amount
    "Amount",
    "allocate",
    "allocate_evenly",
    "allocation_quantum",
    "sum_amounts",
    # Parsing
    "DECIMAL_DELIMITER",
    "THOUSANDS_SEPARATOR",
    "parse_amount",
]
