from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.api.deps import get_db, get_current_user_id
from app.schemas.user import UserRead, UserUpdate
from app.services.users import get_profile, update_username

router = APIRouter(prefix="/users", tags=["User"])

@router.get("/me", response_model=UserRead)
def get_me(db: Session=Depends(get_db), user_id: str=Depends(get_current_user_id)):
    return get_profile(db, user_id)

@router.patch("/me", response_model=UserRead)
def update_me(payload: UserUpdate, db: Session=Depends(get_db), user_id: str=Depends(get_current_user_id)):
    return update_username(db, user_id, payload)
