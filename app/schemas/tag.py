from app.schemas.base import CamelModel

class TagRead(CamelModel):
    id: int
    name: str
    slug: str
