from sqlmodel import SQLModel, Field
from typing import Optional
from uuid import UUID
from enum import Enum

from finance_tracker.models.enums import TransactionType

class CategoryType(str, Enum):
    income = "income"
    expense = "expense"
    both = "both"

    def accepts(self, transaction_type: TransactionType) -> bool:
        """`both` acepta ingresos y gastos; el resto solo su propio tipo."""
        if self is CategoryType.both:
            return True
        return self.value == TransactionType(transaction_type).value

    @classmethod
    def matching(cls, transaction_type: TransactionType) -> list["CategoryType"]:
        return [t for t in cls if t.accepts(transaction_type)]


class Category(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    name: str
    type: CategoryType = Field(default=CategoryType.expense)
