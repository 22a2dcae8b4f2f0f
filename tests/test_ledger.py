from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from conftest import make_account, make_category
from finance_tracker.core.errors import AuthorizationError, NotFoundError, StoreError, ValidationError
from finance_tracker.models import Account, CategoryType, Transaction, TransactionType
from finance_tracker.schemas.transaction import TransactionCreate
from finance_tracker.services.ledger import LedgerService


def tx_data(account, category, amount, transaction_type, **extra):
    return TransactionCreate(
        amount=Decimal(amount),
        description=extra.pop("description", "Movimiento"),
        category_id=category.id,
        account_id=account.id,
        transaction_type=transaction_type,
        **extra,
    )


def balance_of(session, account_id):
    return session.get(Account, account_id).current_balance


def test_record_expense_then_income_moves_balance(session, user) -> None:
    account = make_account(session, user.id, initial_balance="100")
    category = make_category(session, user.id)
    ledger = LedgerService(session)

    ledger.record(user.id, tx_data(account, category, "30", TransactionType.expense))
    assert balance_of(session, account.id) == Decimal("70")

    ledger.record(user.id, tx_data(account, category, "50", TransactionType.income))
    assert balance_of(session, account.id) == Decimal("120")


def test_deleting_expense_restores_its_amount(session, user) -> None:
    account = make_account(session, user.id, initial_balance="100")
    category = make_category(session, user.id)
    ledger = LedgerService(session)

    expense = ledger.record(user.id, tx_data(account, category, "30", TransactionType.expense))
    ledger.record(user.id, tx_data(account, category, "50", TransactionType.income))

    ledger.delete(user.id, expense.id)

    assert balance_of(session, account.id) == Decimal("150")
    assert session.get(Transaction, expense.id) is None


def test_record_then_delete_returns_to_previous_balance(session, user) -> None:
    account = make_account(session, user.id, initial_balance="250.40")
    category = make_category(session, user.id)
    ledger = LedgerService(session)

    tx = ledger.record(user.id, tx_data(account, category, "19.99", TransactionType.expense))
    ledger.delete(user.id, tx.id)

    assert balance_of(session, account.id) == Decimal("250.40")


def test_balance_matches_initial_plus_signed_sum_after_mixed_operations(session, user) -> None:
    cash = make_account(session, user.id, name="Efectivo", initial_balance="100")
    bank = make_account(session, user.id, name="Banco", initial_balance="1000")
    category = make_category(session, user.id)
    ledger = LedgerService(session)

    recorded = []
    operations = [
        (cash, "12.50", TransactionType.expense),
        (bank, "800", TransactionType.income),
        (cash, "40", TransactionType.income),
        (bank, "99.99", TransactionType.expense),
        (cash, "7.25", TransactionType.expense),
        (bank, "15", TransactionType.expense),
    ]
    for account, amount, type_ in operations:
        recorded.append(ledger.record(user.id, tx_data(account, category, amount, type_)))

    ledger.delete(user.id, recorded[1].id)
    ledger.delete(user.id, recorded[4].id)

    for account in (cash, bank):
        remaining = session.exec(
            select(Transaction).where(Transaction.account_id == account.id)
        ).all()
        expected = session.get(Account, account.id).initial_balance + sum(
            (tx.signed_amount for tx in remaining), Decimal("0")
        )
        assert balance_of(session, account.id) == expected


def test_record_fails_for_account_of_another_user(session, user, other_user) -> None:
    foreign_account = make_account(session, other_user.id, initial_balance="100")
    category = make_category(session, user.id)

    with pytest.raises(NotFoundError):
        LedgerService(session).record(
            user.id, tx_data(foreign_account, category, "10", TransactionType.expense)
        )

    assert session.exec(select(Transaction)).all() == []
    assert balance_of(session, foreign_account.id) == Decimal("100")


def test_record_fails_for_category_of_another_user(session, user, other_user) -> None:
    account = make_account(session, user.id)
    foreign_category = make_category(session, other_user.id)

    with pytest.raises(NotFoundError):
        LedgerService(session).record(
            user.id, tx_data(account, foreign_category, "10", TransactionType.expense)
        )
    assert balance_of(session, account.id) == Decimal("100")


def test_record_lists_every_missing_field(session, user) -> None:
    with pytest.raises(ValidationError) as excinfo:
        LedgerService(session).record(user.id, TransactionCreate())

    assert excinfo.value.status_code == 400
    assert excinfo.value.fields == [
        "amount",
        "description",
        "categoryId",
        "accountId",
        "transactionType",
    ]


def test_record_rejects_non_positive_amount_and_blank_description(session, user) -> None:
    account = make_account(session, user.id)
    category = make_category(session, user.id)

    with pytest.raises(ValidationError) as excinfo:
        LedgerService(session).record(
            user.id,
            tx_data(account, category, "0", TransactionType.expense, description="   "),
        )

    assert excinfo.value.fields == ["amount", "description"]
    assert balance_of(session, account.id) == Decimal("100")


def test_record_rejects_category_of_the_other_type(session, user) -> None:
    account = make_account(session, user.id)
    salary = make_category(session, user.id, name="Salario", type_=CategoryType.income)

    with pytest.raises(ValidationError) as excinfo:
        LedgerService(session).record(user.id, tx_data(account, salary, "10", TransactionType.expense))

    assert excinfo.value.fields == ["categoryId"]


def test_record_stores_aware_dates_as_naive_utc(session, user) -> None:
    account = make_account(session, user.id)
    category = make_category(session, user.id)
    aware = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

    tx = LedgerService(session).record(
        user.id,
        tx_data(account, category, "10", TransactionType.income, date=aware, tax_relevant=True),
    )

    assert tx.date == datetime(2025, 3, 1, 12, 0)
    assert tx.tax_relevant is True
    assert tx.created_at is not None


def test_delete_unknown_transaction_is_not_found(session, user) -> None:
    with pytest.raises(NotFoundError):
        LedgerService(session).delete(user.id, 999)


def test_delete_transaction_of_another_user_is_unauthorized(session, user, other_user) -> None:
    account = make_account(session, user.id)
    category = make_category(session, user.id)
    tx = LedgerService(session).record(user.id, tx_data(account, category, "10", TransactionType.expense))

    with pytest.raises(AuthorizationError):
        LedgerService(session).delete(other_user.id, tx.id)

    assert session.get(Transaction, tx.id) is not None
    assert balance_of(session, account.id) == Decimal("90")


def test_delete_with_orphaned_account_only_removes_transaction(session, user) -> None:
    account = make_account(session, user.id)
    category = make_category(session, user.id)
    tx = LedgerService(session).record(user.id, tx_data(account, category, "10", TransactionType.expense))
    tx_id = tx.id

    session.delete(session.get(Account, account.id))
    session.commit()

    LedgerService(session).delete(user.id, tx_id)

    assert session.get(Transaction, tx_id) is None
    assert session.exec(select(Account)).all() == []


def test_list_transactions_newest_first_with_date_range(session, user) -> None:
    account = make_account(session, user.id)
    category = make_category(session, user.id)
    ledger = LedgerService(session)
    for day in (3, 1, 2):
        ledger.record(
            user.id,
            tx_data(account, category, "1", TransactionType.income, date=datetime(2025, 1, day, 9)),
        )

    listed = ledger.list_transactions(user.id)
    assert [tx.date.day for tx in listed] == [3, 2, 1]
    assert listed[0].category.name == "General"
    assert listed[0].account.name == "Efectivo"

    ranged = ledger.list_transactions(
        user.id, start_date=datetime(2025, 1, 2).date(), end_date=datetime(2025, 1, 2).date()
    )
    assert [tx.date.day for tx in ranged] == [2]

    page = ledger.list_transactions(user.id, page=2, limit=2)
    assert [tx.date.day for tx in page] == [1]


def test_amounts_finer_than_a_cent_are_rejected() -> None:
    with pytest.raises(SchemaValidationError) as excinfo:
        TransactionCreate(amount=Decimal("0.004"))
    assert [error["loc"] for error in excinfo.value.errors()] == [("amount",)]

    with pytest.raises(SchemaValidationError):
        TransactionCreate(amount=Decimal("1234567890123.45"))


def test_cent_amounts_round_trip_to_the_same_balance(session, user) -> None:
    account = make_account(session, user.id, initial_balance="100")
    category = make_category(session, user.id)
    ledger = LedgerService(session)

    recorded = [
        ledger.record(user.id, tx_data(account, category, "0.01", TransactionType.expense))
        for _ in range(3)
    ]
    assert balance_of(session, account.id) == Decimal("99.97")

    for tx in recorded:
        ledger.delete(user.id, tx.id)
    assert balance_of(session, account.id) == Decimal("100.00")


def _failing_update(*args, **kwargs):
    raise OperationalError("UPDATE account", {}, Exception("disk I/O error"))


def test_failed_record_rolls_back_insert_and_balance(session, user, monkeypatch) -> None:
    account = make_account(session, user.id, initial_balance="100")
    category = make_category(session, user.id)
    ledger = LedgerService(session)
    monkeypatch.setattr(ledger, "_apply_delta", _failing_update)

    with pytest.raises(StoreError) as excinfo:
        ledger.record(user.id, tx_data(account, category, "30", TransactionType.expense))

    assert excinfo.value.status_code == 500
    assert session.exec(select(Transaction)).all() == []
    assert balance_of(session, account.id) == Decimal("100")


def test_failed_delete_keeps_transaction_and_balance(session, user, monkeypatch) -> None:
    account = make_account(session, user.id, initial_balance="100")
    category = make_category(session, user.id)
    ledger = LedgerService(session)
    tx_id = ledger.record(user.id, tx_data(account, category, "30", TransactionType.expense)).id
    monkeypatch.setattr(ledger, "_apply_delta", _failing_update)

    with pytest.raises(StoreError):
        ledger.delete(user.id, tx_id)

    assert session.get(Transaction, tx_id) is not None
    assert balance_of(session, account.id) == Decimal("70")
