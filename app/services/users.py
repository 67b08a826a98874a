from sqlalchemy.exc import IntegrityError

from app.db.repositories.users import get_user_by_id, username_taken
from app.schemas.user import UserRead, UserUpdate
from app.services.errors import ConflictError, InternalFailure, NotFoundError, is_unique_violation
from app.utils.logger import logger

USERNAME_CONSTRAINT = "uq_users_username"
USERNAME_COLUMN = "users.username"


def _get_user_or_fail(db, user_id: str):
    user = get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError(f"User with ID {user_id} not found")
    return user


def get_profile(db, user_id: str) -> UserRead:
    return UserRead.model_validate(_get_user_or_fail(db, user_id))


def update_username(db, user_id: str, payload: UserUpdate) -> UserRead:
    user = _get_user_or_fail(db, user_id)
    if user.username == payload.username:
        return UserRead.model_validate(user)

    if username_taken(db, payload.username, exclude_id=user.id):
        raise ConflictError(f"Username '{payload.username}' is already taken")

    user.username = payload.username
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc, USERNAME_CONSTRAINT, USERNAME_COLUMN):
            raise ConflictError(f"Username '{payload.username}' is already taken") from exc
        logger.error(f"Unclassified integrity error while updating user {user_id}: {exc}", exc_info=True)
        raise InternalFailure() from exc

    db.refresh(user)
    logger.info(f"User {user_id} changed username to '{user.username}'")
    return UserRead.model_validate(user)
