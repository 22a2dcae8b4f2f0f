import datetime as dt
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from finance_tracker.core.security import get_current_user
from finance_tracker.database import get_session
from finance_tracker.models.enums import ReportPeriod, TransactionType
from finance_tracker.schemas.report import CashflowPoint, CategoryTotal, SummaryRead
from finance_tracker.services.reporting import ReportingService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/cashflow", response_model=List[CashflowPoint])
def get_cashflow(
    user_id: UUID = Depends(get_current_user),
    period: Optional[ReportPeriod] = Query(None),
    start_date: Optional[dt.date] = Query(None, alias="startDate"),
    end_date: Optional[dt.date] = Query(None, alias="endDate"),
    session: Session = Depends(get_session),
):
    return ReportingService(session).cashflow(
        user_id, period=period, start_date=start_date, end_date=end_date
    )


@router.get("/categories", response_model=List[CategoryTotal])
def get_category_distribution(
    user_id: UUID = Depends(get_current_user),
    type: Optional[TransactionType] = Query(None),
    period: Optional[ReportPeriod] = Query(None),
    start_date: Optional[dt.date] = Query(None, alias="startDate"),
    end_date: Optional[dt.date] = Query(None, alias="endDate"),
    session: Session = Depends(get_session),
):
    return ReportingService(session).category_distribution(
        user_id,
        transaction_type=type,
        period=period,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/summary", response_model=SummaryRead)
def get_summary(
    user_id: UUID = Depends(get_current_user),
    start_date: Optional[dt.date] = Query(None, alias="startDate"),
    end_date: Optional[dt.date] = Query(None, alias="endDate"),
    session: Session = Depends(get_session),
):
    return ReportingService(session).summary(user_id, start_date=start_date, end_date=end_date)
