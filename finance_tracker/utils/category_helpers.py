from uuid import UUID
from sqlmodel import Session, select
from typing import List

from finance_tracker.constants.categories import DEFAULT_CATEGORIES
from finance_tracker.models.category import Category


def create_default_categories(user_id: UUID, session: Session) -> List[Category]:
    """
    Crea las categorías base para un usuario nuevo.
    Idempotente: si ya existe una con el mismo nombre no la duplica.
    """
    existing = set(
        session.exec(select(Category.name).where(Category.user_id == user_id)).all()
    )
    created = []
    for name, type_ in DEFAULT_CATEGORIES:
        if name in existing:
            continue
        category = Category(user_id=user_id, name=name, type=type_)
        session.add(category)
        created.append(category)
    return created
