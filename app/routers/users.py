from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.db.session import get_db
from app.models.security import User
from app.schemas.security import UserOut
from app.security.dependencies import require_user_access

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserOut, dependencies=[Depends(require_user_access)])
def get_user(user_id: str, db: Session = Depends(get_db)) -> User:
    user = db.scalars(select(User).where(User.id == user_id).options(selectinload(User.roles))).first()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
