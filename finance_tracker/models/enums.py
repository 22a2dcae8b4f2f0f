from enum import Enum

class TransactionType(str, Enum):
    income = "income"
    expense = "expense"


class ReportPeriod(str, Enum):
    week = "week"
    month = "month"
    quarter = "quarter"
    year = "year"
