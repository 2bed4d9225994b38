"""
Errors — Таксономия исключений debtsolver

Все исключения библиотеки наследуются от DebtSolverError и НЕ являются
ValueError: при выбросе из pydantic-валидаторов они пробрасываются вызывающему
коду как есть, без обёртки в ValidationError.

Классы ошибок:
- InvalidAmountError: неположительная (Transaction) или отрицательная
  (MultiPartyTransaction) сумма; объект не создаётся
- CurrencyMismatchError: арифметика/сравнение Amount в разных валютах
- UnknownCurrencyError: код валюты вне фиксированной таблицы
- AmountParseError: строка не является корректной денежной суммой
- AllocationError: пустой список ratios или ratio <= 0
- UnbalancedLedgerError: сумма балансов не равна нулю (до или после settle)
"""


class DebtSolverError(Exception):
    """Базовое исключение debtsolver."""
    pass


class InvalidAmountError(DebtSolverError):
    """
    Сумма транзакции недопустима.

    Transaction требует amount > 0, MultiPartyTransaction требует amount >= 0.
    Единственная ошибка, которую корректный вызывающий код должен обрабатывать
    в штатном режиме.
    """

    def __init__(self, amount, requirement: str = "greater than 0"):
        self.amount = amount
        super().__init__(f"Transaction amount {amount} must be {requirement}")


class CurrencyMismatchError(DebtSolverError):
    """Операция над Amount разных валют (ошибка программиста, не runtime-условие)."""

    def __init__(self, left, right):
        self.left = left
        self.right = right
        super().__init__(f"Currency mismatch: {left} vs {right}")


class UnknownCurrencyError(DebtSolverError):
    """Код валюты отсутствует в таблице поддерживаемых валют."""

    def __init__(self, code):
        self.code = code
        super().__init__(f"Unknown currency code: {code!r}")


class AmountParseError(DebtSolverError):
    """Строку невозможно разобрать как денежную сумму."""

    def __init__(self, text, reason: str):
        self.text = text
        super().__init__(f"Could not parse amount {text!r}: {reason}")


class AllocationError(DebtSolverError):
    """Некорректные ratios для allocate (пустой список или ratio <= 0)."""
    pass


class UnbalancedLedgerError(DebtSolverError):
    """
    Критическое нарушение инварианта ledger: сумма балансов != 0.

    Недостижимо, если все балансы вносились через публичный API.
    Сигнализирует о модификации ledger в обход API или о дефекте алгоритма
    settlement. Внутри библиотеки никогда не перехватывается.
    """

    def __init__(self, message: str, balances=None):
        self.balances = dict(balances or {})
        super().__init__(message)
