"""
JSON Schema Contract Validators

Модуль для валидации JSON-записей транзакций и планов settlement согласно
формальным JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы (debtsolver/contracts/schema/):
- transaction.json: входная запись Transaction
- multi_party_transaction.json: входная запись MultiPartyTransaction
- settlement_plan.json: выходной план платежей
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Final, Iterable, Iterator, Optional, Union

import jsonschema
from jsonschema import Draft202012Validator

from debtsolver.core.domain import MultiPartyTransaction, Transaction
from debtsolver.core.errors import CurrencyMismatchError
from debtsolver.core.money import DEFAULT_CURRENCY, Currency, parse_amount

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются как package data в contracts/schema/.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'transaction')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


# Контракт → описываемая запись; имя контракта совпадает с именем файла схемы
CONTRACTS: Final[Dict[str, str]] = {
    "transaction": "входящая запись Transaction",
    "multi_party_transaction": "входящая запись MultiPartyTransaction",
    "settlement_plan": "исходящий план платежей",
}


class ContractValidator:
    """Draft 2020-12 валидатор одного контракта из CONTRACTS."""

    def __init__(self, contract: str):
        if contract not in CONTRACTS:
            raise KeyError(f"Unknown contract {contract!r}, expected one of {sorted(CONTRACTS)}")
        self.contract = contract
        self.schema = _SCHEMA_LOADER.load_schema(contract)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, record: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если запись не соответствует контракту
        """
        self.validator.validate(record)

    def is_valid(self, record: Dict[str, Any]) -> bool:
        return self.validator.is_valid(record)

    def iter_errors(self, record: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        return self.validator.iter_errors(record)


_VALIDATORS: Dict[str, ContractValidator] = {}


def contract_validator(contract: str) -> ContractValidator:
    """Кэшированный ContractValidator по имени контракта."""
    if contract not in _VALIDATORS:
        _VALIDATORS[contract] = ContractValidator(contract)
    return _VALIDATORS[contract]


def validate_record(contract: str, record: Dict[str, Any]) -> None:
    contract_validator(contract).validate(record)


# =============================================================================
# RECORD CONVERSION
# =============================================================================


def transaction_from_record(record: Dict[str, Any]) -> Transaction:
    """
    Построение Transaction из JSON-записи.

    Args:
        record: {"debtor": ..., "creditor": ..., "amount": {"value": "10.00", "currency": "USD"}}

    Returns:
        Transaction

    Raises:
        ValidationError: Если запись не соответствует transaction.json
        InvalidAmountError: Если сумма <= 0
    """
    validate_record("transaction", record)
    amount = parse_amount(record["amount"]["value"], record["amount"]["currency"])
    return Transaction(debtor=record["debtor"], creditor=record["creditor"], amount=amount)


def multi_party_transaction_from_record(record: Dict[str, Any]) -> MultiPartyTransaction:
    """
    Построение MultiPartyTransaction из JSON-записи.

    Raises:
        ValidationError: Если запись не соответствует multi_party_transaction.json
        InvalidAmountError: Если сумма < 0
    """
    validate_record("multi_party_transaction", record)
    amount = parse_amount(record["amount"]["value"], record["amount"]["currency"])
    return MultiPartyTransaction(
        debtors=record["debtors"],
        creditors=record["creditors"],
        amount=amount,
    )


def transaction_record(transaction: Transaction) -> Dict[str, Any]:
    """Transaction → JSON-запись (формат transaction.json)."""
    return {
        "debtor": transaction.debtor,
        "creditor": transaction.creditor,
        "amount": {
            "value": str(transaction.amount.value),
            "currency": transaction.amount.currency.value,
        },
    }


def settlement_plan_record(
    payments: Iterable[Transaction],
    currency: Optional[Union[Currency, str]] = None,
) -> Dict[str, Any]:
    """
    Выходной план settlement как JSON-запись (формат settlement_plan.json).

    Args:
        payments: Платежи из Ledger.settle()
        currency: Валюта плана; None → валюта первого платежа или DEFAULT_CURRENCY

    Returns:
        Провалидированная запись {"currency", "payment_count", "payments"}

    Raises:
        CurrencyMismatchError: Если платежи в разных валютах
    """
    payments = list(payments)
    if currency is not None:
        plan_currency = Currency.from_code(currency)
    elif payments:
        plan_currency = payments[0].amount.currency
    else:
        plan_currency = DEFAULT_CURRENCY

    for payment in payments:
        if payment.amount.currency != plan_currency:
            raise CurrencyMismatchError(plan_currency.value, payment.amount.currency.value)

    record = {
        "currency": plan_currency.value,
        "payment_count": len(payments),
        "payments": [transaction_record(payment) for payment in payments],
    }
    validate_record("settlement_plan", record)
    logger.debug("settlement plan with %d payments validated", len(payments))
    return record
