from decimal import Decimal
from sqlmodel import SQLModel, Field
from uuid import UUID
from typing import Optional

class Account(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    name: str
    initial_balance: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    # Solo el LedgerService lo modifica, junto con el alta/baja de transacciones
    current_balance: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
