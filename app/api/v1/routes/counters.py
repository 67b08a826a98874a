from uuid import UUID
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from app.api.deps import get_db, get_current_user_id
from app.schemas.counter import (
    CounterArchive,
    CounterCreate,
    CounterRead,
    CounterUpdate,
    PaginatedCounters,
    UserCounters,
)
from app.services import counters as counters_service
from app.services.public_query import build_public_query

router = APIRouter(prefix="/counters", tags=["Counters"])

@router.post("", response_model=CounterRead, status_code=status.HTTP_201_CREATED)
def create_counter(payload: CounterCreate, db: Session=Depends(get_db), user_id: str=Depends(get_current_user_id)):
    return counters_service.create_counter(db, payload, user_id)

@router.get("/mine", response_model=UserCounters)
def find_my_counters(db: Session=Depends(get_db), user_id: str=Depends(get_current_user_id)):
    return counters_service.find_my_counters(db, user_id)

@router.get("/public", response_model=PaginatedCounters)
def find_public_counters(
    page: int | None = Query(None),
    limit: int | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    search: str | None = Query(None),
    tags: list[str] | None = Query(
        None, description="Tag slugs, repeated or comma separated; matches counters with any of them"
    ),
    db: Session=Depends(get_db),
):
    query = build_public_query(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        tags=tags,
    )
    return counters_service.find_public_counters(db, query)

@router.get("/c/{slug}", response_model=CounterRead)
def find_public_counter(slug: str, db: Session=Depends(get_db)):
    return counters_service.find_public_counter_by_slug(db, slug)

@router.get("/{id}", response_model=CounterRead)
def find_owned_counter(id: UUID, db: Session=Depends(get_db), user_id: str=Depends(get_current_user_id)):
    return counters_service.find_owned_counter(db, str(id), user_id)

@router.patch("/{id}", response_model=CounterRead)
def update_counter(id: UUID, payload: CounterUpdate, db: Session=Depends(get_db), user_id: str=Depends(get_current_user_id)):
    return counters_service.update_counter(db, str(id), payload, user_id)

@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_counter(id: UUID, db: Session=Depends(get_db), user_id: str=Depends(get_current_user_id)):
    counters_service.remove_counter(db, str(id), user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.patch("/{id}/archive", response_model=CounterRead)
def archive_counter(
    id: UUID,
    payload: CounterArchive | None = None,
    db: Session=Depends(get_db),
    user_id: str=Depends(get_current_user_id),
):
    archive_at = payload.archive_at if payload is not None else None
    return counters_service.archive_counter(db, str(id), user_id, archive_at)

@router.patch("/{id}/unarchive", response_model=CounterRead)
def unarchive_counter(id: UUID, db: Session=Depends(get_db), user_id: str=Depends(get_current_user_id)):
    return counters_service.unarchive_counter(db, str(id), user_id)
