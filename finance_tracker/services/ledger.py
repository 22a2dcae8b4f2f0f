"""Libro de transacciones y saldo corriente de las cuentas.

El LedgerService es el único que escribe ``Account.current_balance``. Se
mantiene el invariante::

    current_balance == initial_balance + sum(signed_amount de sus transacciones)

La inserción/borrado de la transacción y el ajuste del saldo van en el mismo
commit, y el ajuste es un incremento atómico en SQL (no leer-modificar-guardar),
así dos requests concurrentes sobre la misma cuenta no se pisan.
"""

import datetime as dt
import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic.alias_generators import to_camel
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from finance_tracker.core.errors import AuthorizationError, NotFoundError, StoreError, ValidationError
from finance_tracker.models.account import Account
from finance_tracker.models.category import Category
from finance_tracker.models.transaction import Transaction
from finance_tracker.schemas.transaction import TransactionCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("amount", "description", "category_id", "account_id", "transaction_type")


class LedgerService:
    def __init__(self, session: Session):
        self.session = session

    def record(self, user_id: UUID, data: TransactionCreate) -> Transaction:
        """Registra la transacción y aplica su efecto sobre el saldo de la cuenta.

        Todas las validaciones corren antes de cualquier escritura.
        """
        self._validate(data)

        account = self.session.exec(
            select(Account).where(Account.id == data.account_id, Account.user_id == user_id)
        ).first()
        if not account:
            raise NotFoundError("Cuenta no encontrada")

        category = self.session.exec(
            select(Category).where(Category.id == data.category_id, Category.user_id == user_id)
        ).first()
        if not category:
            raise NotFoundError("Categoría no encontrada")
        if not category.type.accepts(data.transaction_type):
            raise ValidationError(
                [to_camel("category_id")],
                message="La categoría no coincide con el tipo de la transacción",
            )

        transaction = Transaction(
            user_id=user_id,
            amount=data.amount,
            date=_as_naive_utc(data.date) if data.date else dt.datetime.utcnow(),
            description=data.description.strip(),
            category_id=data.category_id,
            account_id=data.account_id,
            transaction_type=data.transaction_type,
            tax_relevant=data.tax_relevant,
        )
        delta = transaction.signed_amount

        with self._atomic():
            self.session.add(transaction)
            self._apply_delta(user_id, account.id, delta)
        self.session.refresh(transaction)

        logger.info(
            f"transaction_recorded: id={transaction.id} account_id={data.account_id} delta={delta}"
        )
        return transaction

    def delete(self, user_id: UUID, transaction_id: int) -> None:
        transaction = self.session.get(Transaction, transaction_id)
        if not transaction:
            raise NotFoundError("Transacción no encontrada")
        if transaction.user_id != user_id:
            raise AuthorizationError("No autorizado")

        account_id = transaction.account_id
        account = self.session.exec(
            select(Account).where(Account.id == account_id, Account.user_id == user_id)
        ).first()

        # Revertir el efecto original sobre el saldo
        delta = -transaction.signed_amount
        if not account:
            logger.warning(
                f"transaction_orphaned: id={transaction_id} account_id={account_id}, "
                "se omite el ajuste de saldo"
            )

        with self._atomic():
            if account:
                self._apply_delta(user_id, account.id, delta)
            self.session.delete(transaction)

        logger.info(
            f"transaction_deleted: id={transaction_id} account_id={account_id} "
            f"delta={delta if account else 0}"
        )

    def list_transactions(
        self,
        user_id: UUID,
        start_date: Optional[dt.date] = None,
        end_date: Optional[dt.date] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """Transacciones del usuario, más recientes primero, con categoría y cuenta resueltas."""
        query = select(Transaction).where(Transaction.user_id == user_id)

        if start_date:
            query = query.where(Transaction.date >= dt.datetime.combine(start_date, dt.time.min))
        if end_date:
            query = query.where(Transaction.date <= dt.datetime.combine(end_date, dt.time.max))

        query = query.options(
            selectinload(Transaction.category),
            selectinload(Transaction.account),
        ).order_by(Transaction.date.desc(), Transaction.id.desc())

        if page is not None and limit is not None:
            query = query.offset((page - 1) * limit).limit(limit)

        return list(self.session.exec(query).all())

    def _validate(self, data: TransactionCreate) -> None:
        invalid = [name for name in REQUIRED_FIELDS if getattr(data, name) is None]
        if data.amount is not None and data.amount <= 0:
            invalid.append("amount")
        if data.description is not None and not data.description.strip():
            invalid.append("description")
        if invalid:
            raise ValidationError([to_camel(name) for name in invalid])

    def _apply_delta(self, user_id: UUID, account_id: int, delta: Decimal) -> None:
        self.session.exec(
            update(Account)
            .where(Account.id == account_id, Account.user_id == user_id)
            .values(current_balance=Account.current_balance + delta)
        )

    @contextmanager
    def _atomic(self):
        try:
            yield
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("ledger_write_failed")
            raise StoreError()


def _as_naive_utc(value: dt.datetime) -> dt.datetime:
    # Si viene con zona horaria se convierte a UTC naive, igual que lo que guarda la BD
    if value.tzinfo is not None:
        return value.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return value
