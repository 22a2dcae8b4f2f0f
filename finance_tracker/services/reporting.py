"""Reportes de solo lectura sobre las transacciones de un usuario."""

import datetime as dt
from collections import defaultdict
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from sqlmodel import Session, func, select

from finance_tracker.models.category import Category
from finance_tracker.models.enums import ReportPeriod, TransactionType
from finance_tracker.models.transaction import Transaction
from finance_tracker.schemas.report import CashflowPoint, CategoryTotal, SummaryRead

ZERO = Decimal("0")

# Semana y mes se agrupan por día; trimestre, año y sin periodo, por mes calendario
DAY_BUCKET = "%Y-%m-%d"
MONTH_BUCKET = "%Y-%m"
BUCKET_FORMATS = {
    ReportPeriod.week: DAY_BUCKET,
    ReportPeriod.month: DAY_BUCKET,
    ReportPeriod.quarter: MONTH_BUCKET,
    ReportPeriod.year: MONTH_BUCKET,
}


def bucket_format(period: Optional[ReportPeriod]) -> str:
    if period is None:
        return MONTH_BUCKET
    return BUCKET_FORMATS[period]


def period_start(period: ReportPeriod, today: Optional[dt.date] = None) -> dt.date:
    """Primer día del periodo actual (semana desde el lunes)."""
    today = today or dt.date.today()
    if period == ReportPeriod.week:
        return today - dt.timedelta(days=today.weekday())
    if period == ReportPeriod.month:
        return today.replace(day=1)
    if period == ReportPeriod.quarter:
        return today.replace(month=(today.month - 1) // 3 * 3 + 1, day=1)
    return today.replace(month=1, day=1)


def _in_range(query, start_date: Optional[dt.date], end_date: Optional[dt.date]):
    if start_date:
        query = query.where(Transaction.date >= dt.datetime.combine(start_date, dt.time.min))
    if end_date:
        query = query.where(Transaction.date <= dt.datetime.combine(end_date, dt.time.max))
    return query


class ReportingService:
    def __init__(self, session: Session):
        self.session = session

    def cashflow(
        self,
        user_id: UUID,
        period: Optional[ReportPeriod] = None,
        start_date: Optional[dt.date] = None,
        end_date: Optional[dt.date] = None,
    ) -> List[CashflowPoint]:
        """Ingresos, gastos y balance por bucket de fecha, en orden ascendente.

        El periodo solo decide el ancho del bucket; el rango lo dan las fechas.
        """
        fmt = bucket_format(period)
        query = _in_range(
            select(Transaction.date, Transaction.transaction_type, Transaction.amount).where(
                Transaction.user_id == user_id
            ),
            start_date,
            end_date,
        )

        buckets: Dict[str, Dict[str, Decimal]] = defaultdict(lambda: {"income": ZERO, "expense": ZERO})
        for tx_date, tx_type, amount in self.session.exec(query).all():
            key = "income" if tx_type == TransactionType.income else "expense"
            buckets[tx_date.strftime(fmt)][key] += amount

        return [
            CashflowPoint(
                date=bucket,
                income=totals["income"],
                expense=totals["expense"],
                balance=totals["income"] - totals["expense"],
            )
            for bucket, totals in sorted(buckets.items())
        ]

    def category_distribution(
        self,
        user_id: UUID,
        transaction_type: Optional[TransactionType] = None,
        period: Optional[ReportPeriod] = None,
        start_date: Optional[dt.date] = None,
        end_date: Optional[dt.date] = None,
        today: Optional[dt.date] = None,
    ) -> List[CategoryTotal]:
        """Total por categoría, de mayor a menor.

        Con ``period`` y sin ``start_date`` se cuenta desde el inicio del
        mes/trimestre/año en curso.
        """
        if period is not None and start_date is None:
            start_date = period_start(period, today)

        total = func.sum(Transaction.amount)
        query = (
            select(Category.id, Category.name, total)
            .select_from(Transaction)
            .join(Category, Transaction.category_id == Category.id)
            .where(Transaction.user_id == user_id, Category.user_id == user_id)
        )
        if transaction_type is not None:
            query = query.where(Transaction.transaction_type == transaction_type)
        query = (
            _in_range(query, start_date, end_date)
            .group_by(Category.id, Category.name)
            .order_by(total.desc(), Category.name)
        )

        return [
            CategoryTotal(category_id=category_id, category_name=name, total=amount or ZERO)
            for category_id, name, amount in self.session.exec(query).all()
        ]

    def summary(
        self,
        user_id: UUID,
        start_date: Optional[dt.date] = None,
        end_date: Optional[dt.date] = None,
    ) -> SummaryRead:
        query = _in_range(
            select(
                Transaction.transaction_type,
                Transaction.tax_relevant,
                func.sum(Transaction.amount),
            ).where(Transaction.user_id == user_id),
            start_date,
            end_date,
        ).group_by(Transaction.transaction_type, Transaction.tax_relevant)

        totals = {TransactionType.income: ZERO, TransactionType.expense: ZERO}
        tax_totals = dict(totals)
        for tx_type, tax_relevant, amount in self.session.exec(query).all():
            totals[tx_type] += amount or ZERO
            if tax_relevant:
                tax_totals[tx_type] += amount or ZERO

        income = totals[TransactionType.income]
        expense = totals[TransactionType.expense]
        return SummaryRead(
            income=income,
            expense=expense,
            balance=income - expense,
            tax_relevant_income=tax_totals[TransactionType.income],
            tax_relevant_expense=tax_totals[TransactionType.expense],
        )
