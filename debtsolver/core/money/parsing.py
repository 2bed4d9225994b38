"""
Parsing — Разбор денежных сумм из строк

Формат:
- ',': разделитель тысяч (игнорируется): "1,000,000" → 1000000
- '.': десятичный разделитель, не более одного: "29.99"
- Целая часть может иметь знак: "-3", "+3"
- Дробная часть: только цифры, округляется до минорных единиц валюты:
  "29.9999" USD → 30.00
"""

import re
from typing import Final, Union

from debtsolver.core.errors import AmountParseError
from debtsolver.core.money.amount import Amount
from debtsolver.core.money.currency import DEFAULT_CURRENCY, Currency


# =============================================================================
# CONSTANTS
# =============================================================================

THOUSANDS_SEPARATOR: Final[str] = ","
DECIMAL_DELIMITER: Final[str] = "."

_INTEGER_PART: Final[re.Pattern] = re.compile(r"[+-]?[0-9]+")
_FRACTION_PART: Final[re.Pattern] = re.compile(r"[0-9]+")


# =============================================================================
# PARSER
# =============================================================================


def parse_amount(text: str, currency: Union[Currency, str] = DEFAULT_CURRENCY) -> Amount:
    """
    Разбор строки в Amount.

    Args:
        text: Строковое представление суммы
        currency: Валюта (Currency или код)

    Returns:
        Amount, округлённый до минорных единиц валюты

    Raises:
        AmountParseError: Если строка не является корректной суммой
        UnknownCurrencyError: Если код валюты неизвестен

    Examples:
        >>> str(parse_amount("1,000.5", "GBP"))
        '1000.50 GBP'
        >>> str(parse_amount("29.9999"))
        '30.00 USD'
    """
    currency = Currency.from_code(currency)
    if not isinstance(text, str):
        raise AmountParseError(text, "expected a string")

    parts = text.split(DECIMAL_DELIMITER)
    if len(parts) > 2:
        raise AmountParseError(text, f"more than one '{DECIMAL_DELIMITER}' delimiter")

    integer_part = parts[0].replace(THOUSANDS_SEPARATOR, "")
    if not _INTEGER_PART.fullmatch(integer_part):
        raise AmountParseError(text, "integer part is not a number")

    if len(parts) == 1:
        return Amount(value=integer_part, currency=currency)

    fraction_part = parts[1]
    if not _FRACTION_PART.fullmatch(fraction_part):
        raise AmountParseError(text, "fractional part is not a number")

    return Amount(value=f"{integer_part}{DECIMAL_DELIMITER}{fraction_part}", currency=currency)
