from sqlalchemy import select

from app.db.models.tag import Tag


def list_tags(db):
    return db.execute(
        select(Tag).order_by(Tag.name.asc())
    ).scalars().all()


def get_existing_tag_ids(db, tag_ids: list[int]) -> set[int]:
    if not tag_ids:
        return set()

    return set(
        db.execute(
            select(Tag.id).where(Tag.id.in_(tag_ids))
        ).scalars().all()
    )


def get_tag_by_slug(db, slug: str):
    return db.execute(
        select(Tag).where(Tag.slug == slug)
    ).scalar_one_or_none()
