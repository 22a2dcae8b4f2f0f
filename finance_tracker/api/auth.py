from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select
from uuid import UUID

from finance_tracker.database import get_session
from finance_tracker.models.user import User
from finance_tracker.schemas.user import UserCreate, UserRead
from finance_tracker.core.security import (
    get_password_hash,
    verify_password,
    create_access_token,
    get_current_user,
)
from finance_tracker.utils.category_helpers import create_default_categories

router = APIRouter(prefix="/auth", tags=["auth"])

# Registro
@router.post("/register", response_model=UserRead)
def register(user_create: UserCreate, session: Session = Depends(get_session)):
    user_exists = session.exec(select(User).where(User.email == user_create.email)).first()
    if user_exists:
        raise HTTPException(status_code=400, detail="Email ya registrado")

    hashed_pwd = get_password_hash(user_create.password)
    user = User(email=user_create.email, hashed_password=hashed_pwd)
    session.add(user)
    session.commit()
    session.refresh(user)

    create_default_categories(user.id, session)
    session.commit()
    return UserRead(id=user.id, email=user.email)

# Login
@router.post("/login")
def login(form_data: OAuth2PasswordRequestForm = Depends(), session: Session = Depends(get_session)):
    user = session.exec(select(User).where(User.email == form_data.username)).first()
    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Credenciales incorrectas")

    access_token = create_access_token(data={"sub": str(user.id)})
    return {"access_token": access_token, "token_type": "bearer"}

@router.get("/me")
def read_users_me(user_id: UUID = Depends(get_current_user)):
    return {"userId": user_id}
