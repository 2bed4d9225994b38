"""
Transaction — Модели платежей между сторонами

Immutable Pydantic модели:
- Transaction: один debtor платит одному creditor сумму amount > 0
- MultiPartyTransaction: несколько debtors платят нескольким creditors сумму
  amount >= 0, делимую поровну между участниками каждой стороны

Transaction используется дважды: как входная запись (Ledger.add_transaction)
и как результат settlement (список платежей).
"""

from decimal import Decimal
from typing import Tuple, Union

from pydantic import BaseModel, Field, field_validator

from debtsolver.core.errors import InvalidAmountError
from debtsolver.core.money import DEFAULT_CURRENCY, Amount, Currency


# =============================================================================
# TRANSACTION MODEL
# =============================================================================


class Transaction(BaseModel):
    """
    Платёж debtor → creditor.

    Immutable модель (frozen=True). Создание с amount <= 0 → InvalidAmountError.
    """

    debtor: str = Field(..., min_length=1, description="Сторона, которая платит")
    creditor: str = Field(..., min_length=1, description="Сторона, которая получает")
    amount: Amount = Field(..., description="Сумма платежа (строго положительная)")

    model_config = {"frozen": True}

    @field_validator("amount")
    @classmethod
    def validate_amount_positive(cls, v: Amount) -> Amount:
        if not v.is_positive():
            raise InvalidAmountError(v, "greater than 0")
        return v

    @classmethod
    def of(
        cls,
        debtor: str,
        creditor: str,
        value: Union[Decimal, int, str],
        currency: Union[Currency, str] = DEFAULT_CURRENCY,
    ) -> "Transaction":
        """
        Convenience-конструктор из значения и кода валюты.

        Examples:
            >>> str(Transaction.of("Alice", "Bob", 20))
            'Alice owes Bob 20.00 USD'
        """
        return cls(debtor=debtor, creditor=creditor, amount=Amount.of(value, currency))

    def sort_key(self) -> Tuple[str, str, str, Decimal]:
        """Ключ детерминированной сортировки: (debtor, creditor, currency, value)"""
        return (self.debtor, self.creditor, self.amount.currency.value, self.amount.value)

    def __str__(self) -> str:
        return f"{self.debtor} owes {self.creditor} {self.amount}"


# =============================================================================
# MULTI-PARTY TRANSACTION MODEL
# =============================================================================


class MultiPartyTransaction(BaseModel):
    """
    Платёж, разделённый между несколькими плательщиками и/или получателями.

    Порядок сторон значим: при неравном делении первые в списке получают
    первые единицы остатка (см. allocate).
    """

    debtors: Tuple[str, ...] = Field(..., min_length=1, description="Плательщики (порядок значим)")
    creditors: Tuple[str, ...] = Field(..., min_length=1, description="Получатели (порядок значим)")
    amount: Amount = Field(..., description="Общая сумма (неотрицательная)")

    model_config = {"frozen": True}

    @field_validator("debtors", "creditors")
    @classmethod
    def validate_party_ids(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        for party in v:
            if not party:
                raise ValueError("party identifiers must be non-empty strings")
        return v

    @field_validator("amount")
    @classmethod
    def validate_amount_non_negative(cls, v: Amount) -> Amount:
        if v.is_negative():
            raise InvalidAmountError(v, "greater than or equal to 0")
        return v

    def __str__(self) -> str:
        return f"{','.join(self.debtors)} owes {self.amount} to {','.join(self.creditors)}"
