from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from finance_tracker.core.security import create_access_token
from finance_tracker.database import get_session
from finance_tracker.main import app
from finance_tracker.models import Account, Category, CategoryType, Transaction, TransactionType, User


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture
def client(session):
    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(session, email="ana@example.com"):
    user = User(email=email, hashed_password="not-a-real-hash")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def make_account(session, user_id, name="Efectivo", initial_balance="100"):
    balance = Decimal(initial_balance)
    account = Account(user_id=user_id, name=name, initial_balance=balance, current_balance=balance)
    session.add(account)
    session.commit()
    session.refresh(account)
    return account


def make_category(session, user_id, name="General", type_=CategoryType.both):
    category = Category(user_id=user_id, name=name, type=type_)
    session.add(category)
    session.commit()
    session.refresh(category)
    return category


def add_transaction(
    session,
    user_id,
    category,
    account,
    amount,
    transaction_type,
    date,
    tax_relevant=False,
    description="Movimiento",
):
    """Inserta directo, sin pasar por el ledger (para reportes)."""
    tx = Transaction(
        user_id=user_id,
        amount=Decimal(amount),
        date=date if isinstance(date, datetime) else datetime.fromisoformat(date),
        description=description,
        category_id=category.id,
        account_id=account.id,
        transaction_type=TransactionType(transaction_type),
        tax_relevant=tax_relevant,
    )
    session.add(tx)
    session.commit()
    session.refresh(tx)
    return tx


def bearer(user):
    token = create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user(session):
    return make_user(session)


@pytest.fixture
def other_user(session):
    return make_user(session, email="bruno@example.com")


@pytest.fixture
def auth_headers(user):
    return bearer(user)
