import datetime as dt
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from finance_tracker.core.security import get_current_user
from finance_tracker.database import get_session
from finance_tracker.schemas.transaction import TransactionCreate, TransactionRead, TransactionWithRefsRead
from finance_tracker.services.ledger import LedgerService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=List[TransactionWithRefsRead])
@router.get("/", response_model=List[TransactionWithRefsRead])
def list_transactions(
    user_id: UUID = Depends(get_current_user),
    start_date: Optional[dt.date] = Query(None, alias="startDate"),
    end_date: Optional[dt.date] = Query(None, alias="endDate"),
    session: Session = Depends(get_session),
):
    return LedgerService(session).list_transactions(user_id, start_date=start_date, end_date=end_date)


@router.get("/paginated", response_model=List[TransactionWithRefsRead])
def list_transactions_paginated(
    user_id: UUID = Depends(get_current_user),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    session: Session = Depends(get_session),
):
    return LedgerService(session).list_transactions(user_id, page=page, limit=limit)


@router.post("", response_model=TransactionRead)
@router.post("/", response_model=TransactionRead)
def create_transaction(
    transaction_data: TransactionCreate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return LedgerService(session).record(user_id, transaction_data)


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: int,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    LedgerService(session).delete(user_id, transaction_id)
    return {"message": "Transacción eliminada correctamente"}
