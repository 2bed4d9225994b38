"""
Ledger — Карта чистых балансов сторон

Zero-sum ledger: каждый долг имеет равный ему кредит, поэтому сумма всех
балансов всегда равна нулю. Отрицательный баланс: сторона должна,
положительный: стороне должны.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Сумма балансов == 0 после любой последовательности add_* через публичный API
2. Все балансы одной валюты (задаётся конструктором или первой транзакцией)
3. Сторона добавляется в карту при первом появлении в транзакции
4. Порядок сторон совпадает с порядком вставки (детерминированный settlement)
"""

import logging
from typing import Dict, List, Optional, Tuple, Union

from debtsolver.core.domain import MultiPartyTransaction, Transaction
from debtsolver.core.errors import CurrencyMismatchError
from debtsolver.core.money import (
    DEFAULT_CURRENCY,
    Amount,
    Currency,
    allocate_evenly,
    sum_amounts,
)
from debtsolver.settlement import SettlementConfig, SettlementEngine, SettlementResult

logger = logging.getLogger(__name__)


class Ledger:
    """
    Ledger: party → net Amount.

    Ledger единолично владеет картой балансов. settle() мутирует её до
    полностью нулевого состояния; конкурентные вызовы на одном экземпляре
    должны сериализоваться вызывающим кодом.
    """

    def __init__(
        self,
        currency: Optional[Union[Currency, str]] = None,
        config: Optional[SettlementConfig] = None,
    ):
        """
        Args:
            currency: валюта ledger; None → фиксируется первой транзакцией
            config: конфигурация settlement engine
        """
        self._currency: Optional[Currency] = (
            Currency.from_code(currency) if currency is not None else None
        )
        self._balances: Dict[str, Amount] = {}
        self._engine = SettlementEngine(config)

    @property
    def currency(self) -> Optional[Currency]:
        return self._currency

    # -------------------------------------------------------------------------
    # Запись транзакций
    # -------------------------------------------------------------------------

    def add_transaction(self, transaction: Transaction) -> None:
        """
        Дебет debtor и кредит creditor на transaction.amount.

        Raises:
            CurrencyMismatchError: Если валюта не совпадает с валютой ledger
        """
        self._commit(
            transaction.amount.currency,
            [
                (transaction.debtor, -transaction.amount),
                (transaction.creditor, transaction.amount),
            ],
        )
        logger.debug("recorded: %s", transaction)

    def add_multi_party_transaction(self, transaction: MultiPartyTransaction) -> None:
        """
        Равное распределение amount между debtors (дебет) и между creditors (кредит).

        Доли считаются через allocate_evenly, поэтому сумма дебетов == сумма
        кредитов == amount точно, несмотря на целочисленное округление.
        Первые стороны в списке получают первые единицы остатка.

        Raises:
            CurrencyMismatchError: Если валюта не совпадает с валютой ledger
        """
        debt_shares = allocate_evenly(transaction.amount, len(transaction.debtors))
        credit_shares = allocate_evenly(transaction.amount, len(transaction.creditors))

        deltas = [(debtor, -share) for debtor, share in zip(transaction.debtors, debt_shares)]
        deltas += list(zip(transaction.creditors, credit_shares))
        self._commit(transaction.amount.currency, deltas)

        logger.debug("recorded: %s", transaction)

    # -------------------------------------------------------------------------
    # Settlement
    # -------------------------------------------------------------------------

    def settle(self, max_group_size: Optional[int] = None) -> List[Transaction]:
        """
        Минимальный (эвристически) набор платежей, погашающий все долги.

        Мутирует ledger: после успешного вызова все балансы нулевые.

        Args:
            max_group_size: верхняя граница размера групп с нулевой суммой.
                Больше значение → меньше платежей ценой комбинаторного перебора.
                None → config.max_group_size или (число ненулевых сторон - 1).

        Returns:
            Упорядоченный список платежей

        Raises:
            UnbalancedLedgerError: Если ledger несбалансирован (критическая ошибка)
        """
        return list(self.settle_with_report(max_group_size).payments)

    def settle_with_report(self, max_group_size: Optional[int] = None) -> SettlementResult:
        """settle() с полной диагностикой (группы, счётчики платежей)."""
        result = self._engine.settle(self._balances, max_group_size)
        self._balances.update(result.balances)
        return result

    # -------------------------------------------------------------------------
    # Инспекция
    # -------------------------------------------------------------------------

    def to_vector(self) -> List[Tuple[str, Amount]]:
        """Снимок балансов [(party, Amount)] в порядке первого появления сторон."""
        return list(self._balances.items())

    def balance(self, party: str) -> Amount:
        """Баланс стороны; отсутствующая сторона имеет нулевой баланс."""
        if party in self._balances:
            return self._balances[party]
        return Amount.zero(self._currency or DEFAULT_CURRENCY)

    def total(self) -> Amount:
        return sum_amounts(self._balances.values(), self._currency or DEFAULT_CURRENCY)

    def is_balanced(self) -> bool:
        return self.total().is_zero()

    def is_settled(self) -> bool:
        return all(balance.is_zero() for balance in self._balances.values())

    def __len__(self) -> int:
        return len(self._balances)

    def __contains__(self, party: object) -> bool:
        return party in self._balances

    def __repr__(self) -> str:
        return f"Ledger(currency={self._currency and self._currency.value}, parties={len(self)})"

    # -------------------------------------------------------------------------
    # Internal
    # -------------------------------------------------------------------------

    def _commit(self, currency: Currency, deltas: List[Tuple[str, Amount]]) -> None:
        """
        Атомарное применение изменений балансов.

        Новые балансы считаются в локальной карте; self._balances и валюта
        ledger меняются только если вся арифметика прошла успешно.
        """
        if self._currency is not None and currency != self._currency:
            raise CurrencyMismatchError(self._currency.value, currency.value)

        updated: Dict[str, Amount] = {}
        for party, delta in deltas:
            current = updated.get(party, self._balances.get(party))
            if current is None:
                current = Amount.zero(currency)
            updated[party] = current + delta

        self._currency = currency
        self._balances.update(updated)
