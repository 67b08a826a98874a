from datetime import datetime
from pydantic import Field
from app.schemas.base import CamelModel

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"

class UserRead(CamelModel):
    id: str
    email: str
    username: str
    name: str | None = None
    avatar_url: str | None = None
    created_at: datetime
    updated_at: datetime

class UserUpdate(CamelModel):
    username: str = Field(..., min_length=3, max_length=20, pattern=USERNAME_PATTERN)
