from finance_tracker.models.user import User
from finance_tracker.models.account import Account
from finance_tracker.models.category import Category, CategoryType
from finance_tracker.models.transaction import Transaction
from finance_tracker.models.enums import ReportPeriod, TransactionType

__all__ = [
    "User",
    "Account",
    "Category",
    "CategoryType",
    "Transaction",
    "ReportPeriod",
    "TransactionType",
]
