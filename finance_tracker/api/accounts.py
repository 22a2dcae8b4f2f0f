from fastapi import APIRouter, Depends
from sqlmodel import Session, select
from uuid import UUID
from typing import List

from finance_tracker.database import get_session
from finance_tracker.models.account import Account
from finance_tracker.schemas.account import AccountCreate, AccountRead
from finance_tracker.core.security import get_current_user

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("", response_model=AccountRead)
@router.post("/", response_model=AccountRead)
def create_account(
    account_data: AccountCreate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    # El saldo corriente arranca igual al inicial; luego solo lo mueve el ledger
    account = Account(
        user_id=user_id,
        name=account_data.name,
        initial_balance=account_data.initial_balance,
        current_balance=account_data.initial_balance,
    )
    session.add(account)
    session.commit()
    session.refresh(account)
    return account


@router.get("", response_model=List[AccountRead])
@router.get("/", response_model=List[AccountRead])
def list_accounts(
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return session.exec(
        select(Account).where(Account.user_id == user_id).order_by(Account.name)
    ).all()
