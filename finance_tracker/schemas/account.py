from pydantic import Field

from finance_tracker.schemas.base import CamelModel, Money, MoneyInput

class AccountCreate(CamelModel):
    name: str = Field(..., min_length=1)
    initial_balance: MoneyInput

class AccountRead(CamelModel):
    id: int
    name: str
    initial_balance: Money
    current_balance: Money

class AccountRef(CamelModel):
    id: int
    name: str
