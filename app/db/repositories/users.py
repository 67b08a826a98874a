from sqlalchemy import select

from app.db.models.user import User


def get_user_by_id(db, user_id: str):
    return db.execute(
        select(User).where(User.id == user_id)
    ).scalar_one_or_none()


def username_taken(db, username: str, exclude_id: str | None = None) -> bool:
    stmt = select(User.id).where(User.username == username)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)

    return db.execute(stmt.limit(1)).first() is not None
