from datetime import datetime
from typing import Optional

from finance_tracker.models.enums import TransactionType
from finance_tracker.schemas.account import AccountRef
from finance_tracker.schemas.base import CamelModel, Money, MoneyInput
from finance_tracker.schemas.category import CategoryRead

class TransactionCreate(CamelModel):
    # Los obligatorios se validan en el LedgerService para reportarlos todos juntos
    amount: Optional[MoneyInput] = None
    date: Optional[datetime] = None
    description: Optional[str] = None
    category_id: Optional[int] = None
    account_id: Optional[int] = None
    transaction_type: Optional[TransactionType] = None
    tax_relevant: bool = False

class TransactionRead(CamelModel):
    id: int
    amount: Money
    date: datetime
    description: str
    category_id: int
    account_id: int
    transaction_type: TransactionType
    tax_relevant: bool
    created_at: datetime

class TransactionWithRefsRead(TransactionRead):
    category: Optional[CategoryRead] = None
    account: Optional[AccountRef] = None
