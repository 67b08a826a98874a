from datetime import date, datetime
from pydantic import Field, field_validator
from app.schemas.base import CamelModel
from app.schemas.tag import TagRead

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


def _reject_duplicate_ids(value: list[int] | None) -> list[int] | None:
    if value is not None and len(set(value)) != len(value):
        raise ValueError("tagIds must not contain duplicates")
    return value


class CounterCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    start_date: date
    is_private: bool = False
    tag_ids: list[int] | None = None
    slug: str | None = Field(None, min_length=3, max_length=80, pattern=SLUG_PATTERN)
    is_challenge: bool = False
    challenge_duration_days: int | None = None

    @field_validator("tag_ids")
    @classmethod
    def unique_tag_ids(cls, value: list[int] | None) -> list[int] | None:
        return _reject_duplicate_ids(value)


class CounterUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    start_date: date | None = None
    is_private: bool | None = None
    tag_ids: list[int] | None = None
    slug: str | None = Field(None, min_length=3, max_length=80, pattern=SLUG_PATTERN)
    is_challenge: bool | None = None
    challenge_duration_days: int | None = None

    @field_validator("tag_ids")
    @classmethod
    def unique_tag_ids(cls, value: list[int] | None) -> list[int] | None:
        return _reject_duplicate_ids(value)


class CounterArchive(CamelModel):
    # kept as a raw string: unparseable values fall back to "now"
    archive_at: str | None = None


class CounterOwnerRead(CamelModel):
    username: str


class CounterRead(CamelModel):
    id: str
    user_id: str
    name: str
    description: str | None = None
    start_date: date
    archived_at: datetime | None = None
    is_private: bool
    view_count: int
    slug: str
    is_challenge: bool
    challenge_duration_days: int | None = None
    challenge_achieved_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    tags: list[TagRead] = Field(default_factory=list)
    user: CounterOwnerRead | None = None


class UserCounters(CamelModel):
    active: list[CounterRead] = Field(default_factory=list)
    archived: list[CounterRead] = Field(default_factory=list)


class PaginatedCounters(CamelModel):
    items: list[CounterRead] = Field(default_factory=list)
    total_items: int
    total_pages: int
    current_page: int
