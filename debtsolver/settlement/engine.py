"""
Settlement Engine — минимизация числа платежей для погашения долгов

Вход: карта балансов party → Amount (отрицательный = должен, положительный = ему должны).
Выход: упорядоченный список Transaction, обнуляющий все балансы.

Алгоритм:
1. Group matching (размеры 2..max_group_size):
   для каждого размера k перебираются все сочетания k сторон с ненулевым
   балансом (в порядке ключей карты). Группа с нулевой суммой сразу
   закрывается через clear_parties, не более k-1 платежей.
   Пары раньше троек, тройки раньше четвёрок и т.д.
2. max_group_size по умолчанию = (число сторон с ненулевым балансом) - 1.
3. Residual matching: оставшиеся debtors и creditors гасятся жадно
   (не более n_debtors + n_creditors - 1 платежей).

ВАЖНО: это эвристика, а не точный минимум. Оптимальное разбиение на группы
с нулевой суммой является NP-трудной задачей; перебор сочетаний экспоненциален
по числу сторон, поэтому max_group_size ограничивает стоимость поиска.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Сумма балансов == 0 до начала settlement, иначе UnbalancedLedgerError
2. После settlement все балансы == 0, иначе UnbalancedLedgerError
3. Каждый платёж строго положителен
4. Вход не мутируется: engine работает на копии и возвращает итоговые балансы
"""

import logging
from dataclasses import dataclass, field
from itertools import combinations
from typing import Dict, List, Mapping, Optional, Tuple

from debtsolver.core.domain import Transaction
from debtsolver.core.errors import UnbalancedLedgerError
from debtsolver.core.money import Amount, sum_amounts

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class SettlementConfig:
    """Конфигурация settlement.

    max_group_size: верхняя граница размера группы в group matching.
    None → (число сторон с ненулевым балансом) - 1. Значения < 2 отключают
    group matching, остаётся только residual matching.
    """
    max_group_size: Optional[int] = None


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class SettlementResult:
    """Результат settlement."""

    payments: Tuple[Transaction, ...]

    # Закрытые группы с нулевой суммой, в порядке обработки
    groups: Tuple[Tuple[str, ...], ...]

    # Итоговые балансы (все нулевые)
    balances: Dict[str, Amount] = field(default_factory=dict)

    # Диагностика
    max_group_size: int = 0
    group_payment_count: int = 0
    residual_payment_count: int = 0

    @property
    def payment_count(self) -> int:
        return len(self.payments)


# =============================================================================
# PRIMITIVES
# =============================================================================


def find_zero_sum_groups(balances: Mapping[str, Amount], group_size: int) -> List[Tuple[str, ...]]:
    """
    Все сочетания group_size сторон с ненулевым балансом, сумма которых == 0.

    Порядок: лексикографический по порядку ключей balances (itertools.combinations).

    Args:
        balances: Карта party → Amount
        group_size: Размер сочетания

    Returns:
        Список кортежей party id

    Examples:
        >>> b = {"A": Amount.of(-3), "B": Amount.of(1), "C": Amount.of(2)}
        >>> find_zero_sum_groups(b, 3)
        [('A', 'B', 'C')]
    """
    if group_size < 1:
        return []

    active = [party for party, balance in balances.items() if not balance.is_zero()]
    return [
        group
        for group in combinations(active, group_size)
        if sum_amounts(balances[party] for party in group).is_zero()
    ]


def split_parties(balances: Mapping[str, Amount]) -> Tuple[List[str], List[str]]:
    """
    Разделение сторон с ненулевым балансом на debtors и creditors.

    Returns:
        (debtors, creditors) в порядке ключей balances; нулевые балансы пропускаются
    """
    debtors = [party for party, balance in balances.items() if balance.is_negative()]
    creditors = [party for party, balance in balances.items() if balance.is_positive()]
    return debtors, creditors


def clear_parties(
    balances: Dict[str, Amount],
    debtors: List[str],
    creditors: List[str],
) -> List[Transaction]:
    """
    Жадное погашение many-to-many.

    Для каждого debtor по очереди обходит creditors и платит
    min(|долг|, кредит), пока debtor должен. Creditor с нулевым кредитом
    пропускается, debtor с нулевым долгом завершает обход.
    Каждый платёж обнуляет хотя бы одну сторону, поэтому платежей
    не более len(debtors) + len(creditors) - 1.

    Args:
        balances: Рабочая карта балансов (мутируется)
        debtors: Стороны с отрицательным балансом
        creditors: Стороны с положительным балансом

    Returns:
        Платежи в порядке создания
    """
    payments: List[Transaction] = []

    for debtor in debtors:
        for creditor in creditors:
            debt = balances[debtor]
            if not debt.is_negative():
                break

            credit = balances[creditor]
            if not credit.is_positive():
                continue

            payment = min(-debt, credit)
            balances[debtor] = debt + payment
            balances[creditor] = credit - payment

            transaction = Transaction(debtor=debtor, creditor=creditor, amount=payment)
            logger.debug("payment: %s", transaction)
            payments.append(transaction)

    return payments


def default_group_size(balances: Mapping[str, Amount]) -> int:
    """(число сторон с ненулевым балансом) - 1, но не меньше 0"""
    return max(_active_count(balances) - 1, 0)


# =============================================================================
# ENGINE
# =============================================================================


class SettlementEngine:
    """Settlement Engine: group matching + residual matching.

    Однопоточный и синхронный. Не реентерабелен на одной карте балансов:
    вызывающий код сериализует вызовы на один ledger.
    """

    def __init__(self, config: Optional[SettlementConfig] = None):
        """
        Args:
            config: конфигурация settlement (default SettlementConfig())
        """
        self.config = config or SettlementConfig()
        _validate_group_size(self.config.max_group_size)

    def settle(
        self,
        balances: Mapping[str, Amount],
        max_group_size: Optional[int] = None,
    ) -> SettlementResult:
        """Расчёт набора платежей, обнуляющего все балансы.

        Args:
            balances: карта party → Amount (не мутируется)
            max_group_size: переопределяет config.max_group_size

        Returns:
            SettlementResult с платежами и итоговыми (нулевыми) балансами

        Raises:
            UnbalancedLedgerError: если сумма балансов != 0 до начала
                или любой баланс != 0 после завершения
            ValueError: если max_group_size не целое >= 0
        """
        _validate_group_size(max_group_size)
        working: Dict[str, Amount] = dict(balances)
        self._require_zero_sum(working)

        if max_group_size is None:
            max_group_size = self.config.max_group_size
        if max_group_size is None:
            max_group_size = default_group_size(working)

        payments: List[Transaction] = []
        groups: List[Tuple[str, ...]] = []

        # 1. Group matching: точные группы с нулевой суммой, от меньших к большим
        for size in range(2, max_group_size + 1):
            if size > _active_count(working):
                break

            for group in find_zero_sum_groups(working, size):
                # Сторона уже погашена группой того же размера
                if any(working[party].is_zero() for party in group):
                    continue

                debtors = [party for party in group if working[party].is_negative()]
                creditors = [party for party in group if working[party].is_positive()]
                group_payments = clear_parties(working, debtors, creditors)

                logger.debug(
                    "zero-sum group %s cleared with %d payments", group, len(group_payments)
                )
                groups.append(group)
                payments.extend(group_payments)

        group_payment_count = len(payments)

        # 2. Residual matching
        debtors, creditors = split_parties(working)
        residual = clear_parties(working, debtors, creditors)
        payments.extend(residual)

        self._require_settled(working)

        logger.info(
            "settled %d parties with %d payments (%d in %d groups, %d residual)",
            len(working),
            len(payments),
            group_payment_count,
            len(groups),
            len(residual),
        )

        return SettlementResult(
            payments=tuple(payments),
            groups=tuple(groups),
            balances=working,
            max_group_size=max_group_size,
            group_payment_count=group_payment_count,
            residual_payment_count=len(residual),
        )

    def _require_zero_sum(self, balances: Mapping[str, Amount]) -> None:
        if not balances:
            return
        total = sum_amounts(balances.values())
        if not total.is_zero():
            logger.error("ledger is unbalanced before settlement: total %s", total)
            raise UnbalancedLedgerError(
                f"Ledger balances sum to {total}, expected zero", balances
            )

    def _require_settled(self, balances: Mapping[str, Amount]) -> None:
        remaining = {party: b for party, b in balances.items() if not b.is_zero()}
        if remaining:
            logger.error("ledger not settled, non-zero balances remain: %s", remaining)
            raise UnbalancedLedgerError(
                f"Settlement left {len(remaining)} non-zero balances: "
                + ", ".join(f"{party}={b}" for party, b in remaining.items()),
                remaining,
            )


# =============================================================================
# HELPERS
# =============================================================================


def _active_count(balances: Mapping[str, Amount]) -> int:
    return sum(1 for balance in balances.values() if not balance.is_zero())


def _validate_group_size(max_group_size: Optional[int]) -> None:
    if max_group_size is None:
        return
    if isinstance(max_group_size, bool) or not isinstance(max_group_size, int):
        raise ValueError(f"max_group_size must be an integer, got {max_group_size!r}")
    if max_group_size < 0:
        raise ValueError(f"max_group_size must be non-negative, got {max_group_size}")
