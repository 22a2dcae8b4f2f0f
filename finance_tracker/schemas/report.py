from finance_tracker.schemas.base import CamelModel, Money

class CashflowPoint(CamelModel):
    date: str
    income: Money
    expense: Money
    balance: Money

class CategoryTotal(CamelModel):
    category_id: int
    category_name: str
    total: Money

class SummaryRead(CamelModel):
    income: Money
    expense: Money
    balance: Money
    tax_relevant_income: Money
    tax_relevant_expense: Money
