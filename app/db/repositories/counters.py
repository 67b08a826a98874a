from sqlalchemy import func, or_, select, update

from app.db.enums import CounterSortField, SortOrder
from app.db.models.counter import Counter
from app.db.models.counter_tag import CounterTag
from app.db.models.tag import Tag

_SORT_COLUMNS = {
    CounterSortField.START_DATE: Counter.start_date,
    CounterSortField.CREATED_AT: Counter.created_at,
    CounterSortField.NAME: Counter.name,
    CounterSortField.POPULARITY: Counter.view_count,
}


def get_counter_by_id(db, counter_id: str):
    return db.execute(
        select(Counter).where(Counter.id == counter_id)
    ).scalar_one_or_none()


def get_counter_by_slug(db, slug: str):
    return db.execute(
        select(Counter).where(Counter.slug == slug)
    ).scalar_one_or_none()


def slug_exists(db, slug: str, exclude_id: str | None = None) -> bool:
    stmt = select(Counter.id).where(Counter.slug == slug)
    if exclude_id is not None:
        stmt = stmt.where(Counter.id != exclude_id)

    return db.execute(stmt.limit(1)).first() is not None


def list_counters_for_user(db, user_id: str):
    return db.execute(
        select(Counter)
        .where(Counter.user_id == user_id)
        .order_by(Counter.created_at.desc(), Counter.id)
    ).scalars().all()


def set_counter_tags(counter: Counter, tag_ids: list[int]) -> None:
    wanted = set(tag_ids)
    kept = [link for link in counter.tag_links if link.tag_id in wanted]
    existing = {link.tag_id for link in kept}
    counter.tag_links = kept + [CounterTag(tag_id=tag_id) for tag_id in sorted(wanted - existing)]


def increment_view_count(db, counter_id: str) -> None:
    # single UPDATE so concurrent viewers never overwrite each other
    db.execute(
        update(Counter)
        .where(Counter.id == counter_id)
        .values(view_count=Counter.view_count + 1)
        .execution_options(synchronize_session=False)
    )


def delete_counter(db, counter: Counter) -> None:
    # tag links go with it through the relationship cascade
    db.delete(counter)


def _public_conditions(search: str | None, tag_slugs: list[str]):
    conditions = [Counter.is_private.is_(False), Counter.archived_at.is_(None)]

    if search:
        conditions.append(
            or_(
                Counter.name.icontains(search, autoescape=True),
                Counter.description.icontains(search, autoescape=True),
            )
        )

    if tag_slugs:
        # any of the given tags, not all
        conditions.append(
            Counter.tag_links.any(CounterTag.tag.has(Tag.slug.in_(tag_slugs)))
        )

    return conditions


def _public_ordering(sort_by: CounterSortField, sort_order: SortOrder):
    column = _SORT_COLUMNS[sort_by]
    ordering = [column.asc() if sort_order == SortOrder.ASC else column.desc()]
    if sort_by != CounterSortField.CREATED_AT:
        ordering.append(Counter.created_at.desc())
    ordering.append(Counter.id)
    return ordering


def _begin_snapshot(db) -> None:
    if db.in_transaction():
        return
    if db.get_bind().dialect.name == "postgresql":
        db.connection(execution_options={"isolation_level": "REPEATABLE READ"})
    else:
        db.connection()


def list_public_counters(
    db,
    *,
    search: str | None,
    tag_slugs: list[str],
    sort_by: CounterSortField,
    sort_order: SortOrder,
    offset: int,
    limit: int,
):
    conditions = _public_conditions(search, tag_slugs)

    # count and page are read inside one transaction so they agree
    _begin_snapshot(db)

    total = db.execute(
        select(func.count()).select_from(Counter).where(*conditions)
    ).scalar_one()

    items = db.execute(
        select(Counter)
        .where(*conditions)
        .order_by(*_public_ordering(sort_by, sort_order))
        .offset(offset)
        .limit(limit)
    ).scalars().all()

    return items, total
