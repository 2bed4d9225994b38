"""
Contract Validation Module

Валидация JSON-контрактов debtsolver: входные записи транзакций и выходной
план settlement.
"""

from .validators import (
    CONTRACTS,
    ContractValidator,
    SchemaLoader,
    contract_validator,
    multi_party_transaction_from_record,
    settlement_plan_record,
    transaction_from_record,
    transaction_record,
    validate_record,
)

__all__ = [
    # Registry
    "CONTRACTS",
    "SchemaLoader",
    "ContractValidator",
    "contract_validator",
    "validate_record",
    # Record conversion
    "transaction_from_record",
    "multi_party_transaction_from_record",
    "transaction_record",
    "settlement_plan_record",
]
