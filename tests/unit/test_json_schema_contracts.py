"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных записей
- Детекция нарушений required полей, типов, enum и pattern
- Конвертация записей в модели и обратно
"""

import pytest
from jsonschema import ValidationError

from debtsolver.contracts import (
    CONTRACTS,
    SchemaLoader,
    contract_validator,
    multi_party_transaction_from_record,
    settlement_plan_record,
    transaction_from_record,
    transaction_record,
    validate_record,
)
from debtsolver.core.domain import Transaction
from debtsolver.core.errors import CurrencyMismatchError, InvalidAmountError
from debtsolver.core.money import Amount
from debtsolver.ledger import Ledger


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_transaction():
    """Валидная запись transaction."""
    return {
        "debtor": "Alice",
        "creditor": "Bob",
        "amount": {"value": "1,020.50", "currency": "USD"},
    }


@pytest.fixture
def valid_multi_party_transaction():
    """Валидная запись multi_party_transaction."""
    return {
        "debtors": ["Alice", "Bob", "Charlie"],
        "creditors": ["Dave"],
        "amount": {"value": "10", "currency": "GBP"},
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузки схем"""

    @pytest.mark.parametrize(
        "schema_name", ["transaction", "multi_party_transaction", "settlement_plan"]
    )
    def test_schemas_load(self, schema_name):
        schema = SchemaLoader().load_schema(schema_name)
        assert schema["title"] == schema_name

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("transaction") is loader.load_schema("transaction")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "nowhere")


# =============================================================================
# CONTRACT REGISTRY
# =============================================================================


class TestContractRegistry:
    """Тесты реестра контрактов"""

    def test_every_contract_has_schema(self):
        for contract in CONTRACTS:
            assert contract_validator(contract).schema["title"] == contract

    def test_validator_cached(self):
        assert contract_validator("transaction") is contract_validator("transaction")

    def test_unknown_contract(self):
        with pytest.raises(KeyError, match="amount"):
            contract_validator("amount")


# =============================================================================
# TRANSACTION CONTRACT
# =============================================================================


class TestTransactionContract:
    """Тесты контракта transaction"""

    def test_valid(self, valid_transaction):
        validate_record("transaction", valid_transaction)
        assert contract_validator("transaction").is_valid(valid_transaction)

    def test_missing_required_field(self, valid_transaction):
        del valid_transaction["creditor"]
        with pytest.raises(ValidationError, match="creditor"):
            validate_record("transaction", valid_transaction)

    def test_empty_party(self, valid_transaction):
        valid_transaction["debtor"] = ""
        with pytest.raises(ValidationError):
            validate_record("transaction", valid_transaction)

    def test_unknown_currency(self, valid_transaction):
        valid_transaction["amount"]["currency"] = "XYZ"
        with pytest.raises(ValidationError):
            validate_record("transaction", valid_transaction)

    @pytest.mark.parametrize("value", ["abc", "1.2.3", "", ".5", "5."])
    def test_malformed_value(self, valid_transaction, value):
        valid_transaction["amount"]["value"] = value
        with pytest.raises(ValidationError):
            validate_record("transaction", valid_transaction)

    def test_numeric_value_rejected(self, valid_transaction):
        valid_transaction["amount"]["value"] = 10
        with pytest.raises(ValidationError):
            validate_record("transaction", valid_transaction)

    def test_additional_property(self, valid_transaction):
        valid_transaction["note"] = "lunch"
        assert not contract_validator("transaction").is_valid(valid_transaction)
        assert len(list(contract_validator("transaction").iter_errors(valid_transaction))) == 1

    def test_from_record(self, valid_transaction):
        tx = transaction_from_record(valid_transaction)
        assert tx == Transaction.of("Alice", "Bob", "1020.50")

    def test_from_record_non_positive(self, valid_transaction):
        valid_transaction["amount"]["value"] = "-5"
        with pytest.raises(InvalidAmountError):
            transaction_from_record(valid_transaction)

    def test_record_round_trip(self, valid_transaction):
        record = transaction_record(transaction_from_record(valid_transaction))
        assert record["amount"] == {"value": "1020.50", "currency": "USD"}
        validate_record("transaction", record)


# =============================================================================
# MULTI-PARTY TRANSACTION CONTRACT
# =============================================================================


class TestMultiPartyTransactionContract:
    """Тесты контракта multi_party_transaction"""

    def test_valid(self, valid_multi_party_transaction):
        validate_record("multi_party_transaction", valid_multi_party_transaction)
        assert contract_validator("multi_party_transaction").is_valid(valid_multi_party_transaction)

    def test_empty_debtors(self, valid_multi_party_transaction):
        valid_multi_party_transaction["debtors"] = []
        with pytest.raises(ValidationError):
            validate_record("multi_party_transaction", valid_multi_party_transaction)

    def test_from_record(self, valid_multi_party_transaction):
        mptx = multi_party_transaction_from_record(valid_multi_party_transaction)
        assert mptx.debtors == ("Alice", "Bob", "Charlie")
        assert mptx.amount == Amount.of(10, "GBP")

        ledger = Ledger()
        ledger.add_multi_party_transaction(mptx)
        assert ledger.is_balanced()


# =============================================================================
# SETTLEMENT PLAN CONTRACT
# =============================================================================


class TestSettlementPlanContract:
    """Тесты контракта settlement_plan"""

    def test_plan_from_settle(self):
        ledger = Ledger()
        ledger.add_transaction(Transaction.of("Alice", "Bob", 20))
        ledger.add_transaction(Transaction.of("Bob", "Charlie", 20))

        record = settlement_plan_record(ledger.settle())

        assert record == {
            "currency": "USD",
            "payment_count": 1,
            "payments": [
                {
                    "debtor": "Alice",
                    "creditor": "Charlie",
                    "amount": {"value": "20.00", "currency": "USD"},
                }
            ],
        }
        assert contract_validator("settlement_plan").is_valid(record)

    def test_empty_plan(self):
        record = settlement_plan_record([])
        assert record == {"currency": "USD", "payment_count": 0, "payments": []}

    def test_explicit_currency(self):
        record = settlement_plan_record([], currency="JPY")
        assert record["currency"] == "JPY"

    def test_mixed_currencies(self):
        payments = [Transaction.of("A", "B", 1, "USD"), Transaction.of("A", "B", 1, "GBP")]
        with pytest.raises(CurrencyMismatchError):
            settlement_plan_record(payments)

    def test_negative_payment_count(self):
        with pytest.raises(ValidationError):
            validate_record("settlement_plan", {"currency": "USD", "payment_count": -1, "payments": []})
