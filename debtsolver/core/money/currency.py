"""
Currency — Фиксированная таблица валют

Закрытое перечисление поддерживаемых валют вместо глобального изменяемого
реестра. Неизвестный код → UnknownCurrencyError.
"""

from enum import Enum
from typing import Final, Union

from debtsolver.core.errors import UnknownCurrencyError


# =============================================================================
# ENUMS
# =============================================================================


class Currency(str, Enum):
    """Поддерживаемые валюты (ISO 4217)"""

    USD = "USD"
    GBP = "GBP"
    EUR = "EUR"
    CHF = "CHF"
    JPY = "JPY"

    @property
    def code(self) -> str:
        return self.value

    @property
    def minor_units(self) -> int:
        """Количество знаков после запятой (2 для USD → центы, 0 для JPY)"""
        return MINOR_UNITS[self]

    @classmethod
    def from_code(cls, code: Union["Currency", str]) -> "Currency":
        """
        Валидация кода валюты.

        Args:
            code: Currency или строковый код ('USD')

        Returns:
            Член перечисления Currency

        Raises:
            UnknownCurrencyError: Если код не входит в таблицу
        """
        if isinstance(code, Currency):
            return code
        try:
            return cls(code)
        except ValueError:
            raise UnknownCurrencyError(code) from None


# =============================================================================
# CONSTANTS
# =============================================================================

# Число минорных единиц (знаков после запятой) по валютам
MINOR_UNITS: Final[dict] = {
    Currency.USD: 2,
    Currency.GBP: 2,
    Currency.EUR: 2,
    Currency.CHF: 2,
    Currency.JPY: 0,
}

# Валюта по умолчанию для convenience-конструкторов
DEFAULT_CURRENCY: Final[Currency] = Currency.USD
