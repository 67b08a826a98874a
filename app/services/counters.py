import math
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError

from app.db.models.counter import Counter
from app.db.repositories.counters import (
    delete_counter,
    get_counter_by_id,
    get_counter_by_slug,
    increment_view_count,
    list_counters_for_user,
    list_public_counters,
    set_counter_tags,
    slug_exists,
)
from app.db.repositories.tags import get_existing_tag_ids
from app.db.repositories.users import get_user_by_id
from app.schemas.counter import (
    CounterCreate,
    CounterOwnerRead,
    CounterRead,
    CounterUpdate,
    PaginatedCounters,
    UserCounters,
)
from app.schemas.tag import TagRead
from app.services.errors import (
    ConflictError,
    ForbiddenError,
    InternalFailure,
    NotFoundError,
    ValidationFailure,
    is_unique_violation,
)
from app.services.public_query import PublicCounterQuery
from app.services.slugs import generate_unique_slug
from app.utils.logger import logger

SLUG_CONSTRAINT = "uq_counters_slug"
SLUG_COLUMN = "counters.slug"


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _counter_read(counter: Counter) -> CounterRead:
    tags = sorted((link.tag for link in counter.tag_links), key=lambda tag: tag.name)
    return CounterRead(
        id=counter.id,
        user_id=counter.user_id,
        name=counter.name,
        description=counter.description,
        start_date=counter.start_date,
        archived_at=_to_utc(counter.archived_at) if counter.archived_at is not None else None,
        is_private=counter.is_private,
        view_count=counter.view_count,
        slug=counter.slug,
        is_challenge=counter.is_challenge,
        challenge_duration_days=counter.challenge_duration_days,
        challenge_achieved_at=(
            _to_utc(counter.challenge_achieved_at) if counter.challenge_achieved_at is not None else None
        ),
        created_at=_to_utc(counter.created_at),
        updated_at=_to_utc(counter.updated_at),
        tags=[TagRead.model_validate(tag) for tag in tags],
        user=CounterOwnerRead(username=counter.user.username) if counter.user is not None else None,
    )


def _get_owned_counter(db, counter_id: str, user_id: str) -> Counter:
    counter = get_counter_by_id(db, counter_id)
    if counter is None:
        raise NotFoundError(f"Counter with ID {counter_id} not found")
    if counter.user_id != user_id:
        raise ForbiddenError("You do not have permission to access this counter")
    return counter


def _ensure_tags_exist(db, tag_ids: list[int]) -> None:
    missing = set(tag_ids) - get_existing_tag_ids(db, tag_ids)
    if missing:
        raise ValidationFailure(f"Unknown tag id(s): {', '.join(str(i) for i in sorted(missing))}")


def _resolve_challenge_duration(is_challenge: bool, duration: int | None) -> int | None:
    if not is_challenge:
        return None
    if duration is None or duration < 1:
        raise ValidationFailure("challengeDurationDays must be a positive integer when isChallenge is true")
    return duration


def _parse_archive_date(value: str | datetime | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return _to_utc(value)

    try:
        return _to_utc(datetime.fromisoformat(value.strip()))
    except ValueError:
        logger.debug(f"Ignoring unparseable archive date {value!r}")
        return None


def _commit(db) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc, SLUG_CONSTRAINT, SLUG_COLUMN):
            raise ConflictError("Slug is already taken") from exc
        logger.error(f"Unclassified integrity error while saving counter: {exc}", exc_info=True)
        raise InternalFailure() from exc


def create_counter(db, payload: CounterCreate, user_id: str) -> CounterRead:
    duration = _resolve_challenge_duration(payload.is_challenge, payload.challenge_duration_days)

    if get_user_by_id(db, user_id) is None:
        raise NotFoundError(f"User with ID {user_id} not found")

    tag_ids = payload.tag_ids or []
    _ensure_tags_exist(db, tag_ids)

    if not payload.is_private and payload.slug:
        if slug_exists(db, payload.slug):
            raise ConflictError(f"Slug '{payload.slug}' is already taken")
        slug = payload.slug
    else:
        slug = generate_unique_slug(db, payload.name)

    counter = Counter(
        user_id=user_id,
        name=payload.name,
        description=payload.description,
        start_date=payload.start_date,
        is_private=payload.is_private,
        view_count=0,
        slug=slug,
        is_challenge=payload.is_challenge,
        challenge_duration_days=duration,
        challenge_achieved_at=None,
    )
    set_counter_tags(counter, tag_ids)
    db.add(counter)

    _commit(db)
    db.refresh(counter)

    logger.info(f"Counter {counter.id} created by user {user_id} with slug '{counter.slug}'")
    return _counter_read(counter)


def find_my_counters(db, user_id: str) -> UserCounters:
    counters = [_counter_read(counter) for counter in list_counters_for_user(db, user_id)]
    return UserCounters(
        active=[counter for counter in counters if counter.archived_at is None],
        archived=[counter for counter in counters if counter.archived_at is not None],
    )


def find_owned_counter(db, counter_id: str, user_id: str) -> CounterRead:
    return _counter_read(_get_owned_counter(db, counter_id, user_id))


def update_counter(db, counter_id: str, payload: CounterUpdate, user_id: str) -> CounterRead:
    counter = _get_owned_counter(db, counter_id, user_id)
    changes = payload.model_dump(exclude_unset=True)

    # null on a required field means "leave as is"
    name = payload.name if payload.name is not None else counter.name
    start_date = payload.start_date if payload.start_date is not None else counter.start_date
    is_private = payload.is_private if payload.is_private is not None else counter.is_private
    is_challenge = payload.is_challenge if payload.is_challenge is not None else counter.is_challenge
    requested_duration = (
        payload.challenge_duration_days
        if "challenge_duration_days" in changes
        else counter.challenge_duration_days
    )

    duration = _resolve_challenge_duration(is_challenge, requested_duration)

    achieved_at = counter.challenge_achieved_at
    if not is_challenge:
        achieved_at = None
    elif counter.is_challenge and (
        start_date != counter.start_date or duration != counter.challenge_duration_days
    ):
        # achievement no longer holds under the new goal
        achieved_at = None

    if counter.archived_at is not None and start_date > _to_utc(counter.archived_at).date():
        raise ValidationFailure("startDate cannot be after the counter's archive date")

    if payload.tag_ids is not None:
        _ensure_tags_exist(db, payload.tag_ids)

    requested_slug = payload.slug
    name_changed = name != counter.name
    slug_changed = requested_slug is not None and requested_slug != counter.slug
    becoming_public = counter.is_private and not is_private

    slug = counter.slug
    if name_changed or slug_changed or (becoming_public and requested_slug is None):
        if not is_private and requested_slug is not None:
            if slug_exists(db, requested_slug, exclude_id=counter.id):
                raise ConflictError(f"Slug '{requested_slug}' is already taken")
            slug = requested_slug
        else:
            slug = generate_unique_slug(db, name, exclude_id=counter.id)

    counter.name = name
    if "description" in changes:
        counter.description = payload.description
    counter.start_date = start_date
    counter.is_private = is_private
    counter.is_challenge = is_challenge
    counter.challenge_duration_days = duration
    counter.challenge_achieved_at = achieved_at
    counter.slug = slug

    if payload.tag_ids is not None:
        set_counter_tags(counter, payload.tag_ids)

    _commit(db)
    db.refresh(counter)

    logger.info(f"Counter {counter.id} updated by user {user_id}")
    return _counter_read(counter)


def archive_counter(db, counter_id: str, user_id: str, archive_at: str | datetime | None = None) -> CounterRead:
    counter = _get_owned_counter(db, counter_id, user_id)
    if counter.archived_at is not None:
        return _counter_read(counter)

    now = datetime.now(timezone.utc)
    archived_at = _parse_archive_date(archive_at) or now

    if archived_at.date() < counter.start_date:
        raise ValidationFailure("Archive date cannot be before the counter's start date")
    if archived_at > now:
        raise ValidationFailure("Archive date cannot be in the future")

    counter.archived_at = archived_at
    _commit(db)
    db.refresh(counter)

    logger.info(f"Counter {counter.id} archived at {archived_at.isoformat()}")
    return _counter_read(counter)


def unarchive_counter(db, counter_id: str, user_id: str) -> CounterRead:
    counter = _get_owned_counter(db, counter_id, user_id)
    if counter.archived_at is None:
        return _counter_read(counter)

    counter.archived_at = None
    _commit(db)
    db.refresh(counter)

    logger.info(f"Counter {counter.id} unarchived")
    return _counter_read(counter)


def remove_counter(db, counter_id: str, user_id: str) -> None:
    counter = _get_owned_counter(db, counter_id, user_id)
    delete_counter(db, counter)
    _commit(db)

    logger.info(f"Counter {counter_id} deleted by user {user_id}")


def _record_view(db, counter_id: str) -> None:
    try:
        increment_view_count(db, counter_id)
        db.commit()
    except Exception as exc:
        db.rollback()
        logger.warning(f"Failed to increment view count for counter {counter_id}: {exc}")


def find_public_counter_by_slug(db, slug: str) -> CounterRead:
    counter = get_counter_by_slug(db, slug)
    # private counters look exactly like missing ones
    if counter is None or counter.is_private:
        raise NotFoundError(f"Counter '{slug}' not found")

    result = _counter_read(counter)
    if counter.archived_at is None:
        _record_view(db, counter.id)
    return result


def find_public_counters(db, query: PublicCounterQuery) -> PaginatedCounters:
    items, total = list_public_counters(
        db,
        search=query.search,
        tag_slugs=query.tag_slugs,
        sort_by=query.sort_by,
        sort_order=query.sort_order,
        offset=query.offset,
        limit=query.limit,
    )

    return PaginatedCounters(
        items=[_counter_read(counter) for counter in items],
        total_items=total,
        total_pages=math.ceil(total / query.limit) if total else 0,
        current_page=query.page,
    )
