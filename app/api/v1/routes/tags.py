from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.api.deps import get_db
from app.db.repositories.tags import list_tags
from app.schemas.tag import TagRead

router = APIRouter(prefix="/tags", tags=["Tags"])

@router.get("", response_model=list[TagRead])
def get_tags(db: Session=Depends(get_db)):
    return list_tags(db)
