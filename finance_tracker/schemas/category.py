from pydantic import Field

from finance_tracker.models.category import CategoryType
from finance_tracker.schemas.base import CamelModel

class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1)
    type: CategoryType

class CategoryRead(CamelModel):
    id: int
    name: str
    type: CategoryType
