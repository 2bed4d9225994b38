"""
Amount — Точная денежная сумма с тегом валюты

Immutable Pydantic модель: Decimal-значение, округлённое до минорных единиц
валюты (ROUND_HALF_UP), и Currency.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Арифметика и сравнения (<, <=, >, >=) только внутри одной валюты,
   иначе CurrencyMismatchError
2. Равенство (==) по значению и валюте; разные валюты просто не равны
3. allocate сохраняет сумму точно: sum(shares) == amount
4. Остаток allocate распределяется детерминированно, по порядку ratios
"""

import operator
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import reduce
from typing import Any, Iterable, List, Union

from pydantic import BaseModel, Field, model_validator

from debtsolver.core.errors import AllocationError, CurrencyMismatchError
from debtsolver.core.money.currency import DEFAULT_CURRENCY, Currency


# =============================================================================
# AMOUNT MODEL
# =============================================================================


class Amount(BaseModel):
    """
    Денежная сумма: value (Decimal) + currency.

    Immutable модель (frozen=True). Отрицательные значения допустимы
    (баланс должника в ledger).
    """

    value: Decimal = Field(..., description="Значение, округлённое до минорных единиц валюты")
    currency: Currency = Field(..., description="Валюта (ISO 4217)")

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def round_to_minor_units(cls, data: Any) -> Any:
        """Округление value до минорных единиц валюты (29.9999 USD → 30.00 USD)"""
        if not isinstance(data, dict) or "value" not in data or "currency" not in data:
            return data

        currency = Currency.from_code(data["currency"])
        raw = data["value"]
        try:
            value = raw if isinstance(raw, Decimal) else Decimal(str(raw))
        except InvalidOperation:
            raise ValueError(f"value {raw!r} is not a decimal number") from None
        if not value.is_finite():
            raise ValueError(f"value must be finite, got {raw!r}")

        quantum = Decimal(1).scaleb(-currency.minor_units)
        try:
            rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            # Больше значащих цифр, чем вмещает decimal-контекст
            raise ValueError(f"value {raw!r} exceeds decimal precision") from None
        return {**data, "value": rounded, "currency": currency}

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, value: Union[Decimal, int, str], currency: Union[Currency, str] = DEFAULT_CURRENCY) -> "Amount":
        return cls(value=value, currency=currency)

    @classmethod
    def zero(cls, currency: Union[Currency, str] = DEFAULT_CURRENCY) -> "Amount":
        return cls(value=Decimal(0), currency=currency)

    # -------------------------------------------------------------------------
    # Предикаты знака
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.value == 0

    def is_positive(self) -> bool:
        """Строго > 0 (ноль не положителен)"""
        return self.value > 0

    def is_negative(self) -> bool:
        """Строго < 0 (ноль не отрицателен)"""
        return self.value < 0

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def _require_same_currency(self, other: "Amount") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency.value, other.currency.value)

    def __add__(self, other: "Amount") -> "Amount":
        if not isinstance(other, Amount):
            return NotImplemented
        self._require_same_currency(other)
        return Amount(value=self.value + other.value, currency=self.currency)

    def __sub__(self, other: "Amount") -> "Amount":
        if not isinstance(other, Amount):
            return NotImplemented
        self._require_same_currency(other)
        return Amount(value=self.value - other.value, currency=self.currency)

    def __neg__(self) -> "Amount":
        return Amount(value=-self.value, currency=self.currency)

    def __abs__(self) -> "Amount":
        return Amount(value=abs(self.value), currency=self.currency)

    # -------------------------------------------------------------------------
    # Сравнения (только одна валюта)
    # -------------------------------------------------------------------------

    def compare(self, other: "Amount") -> int:
        """
        Полный порядок по значению.

        Returns:
            -1, 0 или 1

        Raises:
            CurrencyMismatchError: Если валюты различаются
        """
        self._require_same_currency(other)
        if self.value < other.value:
            return -1
        if self.value > other.value:
            return 1
        return 0

    def __lt__(self, other: "Amount") -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: "Amount") -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: "Amount") -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: "Amount") -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        return self.compare(other) >= 0

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    def allocate(self, ratios: List[int]) -> List["Amount"]:
        return allocate(self, ratios)

    def allocate_evenly(self, number: int) -> List["Amount"]:
        return allocate_evenly(self, number)

    def __str__(self) -> str:
        return f"{self.value} {self.currency.value}"


# =============================================================================
# ALLOCATION
# =============================================================================


def allocation_quantum(amount: Amount) -> Decimal:
    """
    Минимальная единица распределения для суммы.

    Самая мелкая единица, которую фактически выражает значение: не крупнее 1
    и не мельче минорной единицы валюты.

    Examples:
        >>> allocation_quantum(Amount.of(11))
        Decimal('1')
        >>> allocation_quantum(Amount.of("10.01"))
        Decimal('0.01')
    """
    if amount.is_zero():
        return Decimal(1)
    exponent = amount.value.normalize().as_tuple().exponent
    return Decimal(1).scaleb(min(0, exponent))


def allocate(amount: Amount, ratios: List[int]) -> List[Amount]:
    """
    Пропорциональное распределение суммы по ratios.

    Каждая доля = floor(amount * ratio / sum(ratios)) в единицах allocation_quantum.
    Остаток (целое неотрицательное число единиц) раздаётся по одной единице
    долям в порядке ratios, пока не исчерпается.

    Гранулярность зависит от значащих цифр значения, а не от валюты:
    10.10 делится в десятых ([3.40, 3.40, 3.30]), 10.11 делится в центах
    ([3.37, 3.37, 3.37]). Сумма долей в обоих случаях точная.

    Args:
        amount: Распределяемая сумма
        ratios: Положительные целые веса (непустой список)

    Returns:
        len(ratios) долей, сумма которых точно равна amount

    Raises:
        AllocationError: Если ratios пуст или содержит ratio <= 0

    Examples:
        >>> [str(s) for s in allocate(Amount.of(11), [1, 1, 1])]
        ['4.00 USD', '4.00 USD', '3.00 USD']
    """
    if not ratios:
        raise AllocationError("ratios cannot be empty")
    for ratio in ratios:
        if isinstance(ratio, bool) or not isinstance(ratio, int):
            raise AllocationError(f"Ratio {ratio!r} is not an integer")
        if ratio <= 0:
            raise AllocationError(f"Ratio {ratio} was zero or negative, should be positive")

    quantum = allocation_quantum(amount)
    # Точное целое: value кратно quantum по построению
    units = int(amount.value / quantum)
    ratio_total = sum(ratios)

    shares = [units * ratio // ratio_total for ratio in ratios]
    remainder = units - sum(shares)

    # floor-ошибка каждой доли < 1 единицы → 0 <= remainder < len(ratios)
    for i in range(remainder):
        shares[i] += 1

    return [Amount(value=share * quantum, currency=amount.currency) for share in shares]


def allocate_evenly(amount: Amount, number: int) -> List[Amount]:
    """
    Равное распределение на number долей (allocate с ratios = [1] * number).

    Raises:
        AllocationError: Если number < 1
    """
    if isinstance(number, bool) or not isinstance(number, int) or number < 1:
        raise AllocationError(f"Cannot allocate to {number!r} parts, need at least 1")
    return allocate(amount, [1] * number)


# =============================================================================
# UTILITIES
# =============================================================================


def sum_amounts(amounts: Iterable[Amount], currency: Union[Currency, str] = DEFAULT_CURRENCY) -> Amount:
    """
    Сумма последовательности Amount.

    Args:
        amounts: Суммы одной валюты
        currency: Валюта результата для пустой последовательности

    Raises:
        CurrencyMismatchError: Если валюты различаются
    """
    items = list(amounts)
    if not items:
        return Amount.zero(currency)
    return reduce(operator.add, items[1:], items[0])
