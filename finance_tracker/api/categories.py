from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from finance_tracker.database import get_session
from finance_tracker.models.category import Category, CategoryType
from finance_tracker.models.enums import TransactionType
from finance_tracker.schemas.category import CategoryCreate, CategoryRead
from finance_tracker.core.security import get_current_user

router = APIRouter(prefix="/categories", tags=["categories"])

@router.post("", response_model=CategoryRead)
@router.post("/", response_model=CategoryRead)
def create_category(
    category_data: CategoryCreate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    category = Category(**category_data.model_dump(), user_id=user_id)
    session.add(category)
    session.commit()
    session.refresh(category)
    return category

@router.get("", response_model=list[CategoryRead])
@router.get("/", response_model=list[CategoryRead])
def list_categories(
    user_id: UUID = Depends(get_current_user),
    type: Optional[TransactionType] = Query(None),
    session: Session = Depends(get_session),
):
    """
    Lista las categorías del usuario por nombre. Con `type` solo devuelve las
    que aceptan ese tipo de transacción (las `both` siempre entran).
    """
    query = select(Category).where(Category.user_id == user_id)

    if type:
        query = query.where(Category.type.in_(CategoryType.matching(type)))

    return session.exec(query.order_by(Category.name)).all()
