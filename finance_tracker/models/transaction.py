from decimal import Decimal
from uuid import UUID
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional
from datetime import datetime

from finance_tracker.models.enums import TransactionType
from finance_tracker.models.category import Category
from finance_tracker.models.account import Account

class Transaction(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    # Magnitud no negativa; el signo lo da transaction_type
    amount: Decimal = Field(max_digits=14, decimal_places=2)
    date: datetime = Field(default_factory=datetime.utcnow, index=True)
    description: str
    transaction_type: TransactionType
    tax_relevant: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    category_id: int = Field(foreign_key="category.id")
    category: Optional[Category] = Relationship()

    # Sin FK estricta: una cuenta puede desaparecer y dejar la referencia huérfana
    account_id: int = Field(index=True)
    account: Optional[Account] = Relationship(
        sa_relationship_kwargs={
            "primaryjoin": "Transaction.account_id == Account.id",
            "foreign_keys": "[Transaction.account_id]",
            "viewonly": True,
        }
    )

    @property
    def signed_amount(self) -> Decimal:
        """Efecto sobre el saldo de la cuenta: +amount en ingresos, -amount en gastos."""
        if self.transaction_type == TransactionType.income:
            return self.amount
        return -self.amount
