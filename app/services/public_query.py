from dataclasses import dataclass, field

from app.db.enums import CounterSortField, SortOrder

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 50
DEFAULT_SORT_FIELD = CounterSortField.CREATED_AT
DEFAULT_SORT_ORDER = SortOrder.DESC


@dataclass(frozen=True)
class PublicCounterQuery:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE
    sort_by: CounterSortField = DEFAULT_SORT_FIELD
    sort_order: SortOrder = DEFAULT_SORT_ORDER
    search: str | None = None
    tag_slugs: list[str] = field(default_factory=list)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _parse_enum(enum_cls, value, default):
    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    normalized = str(value).strip()
    for member in enum_cls:
        if member.value.lower() == normalized.lower():
            return member
    return default


def _parse_tag_slugs(tags: str | list[str] | None) -> list[str]:
    if not tags:
        return []

    raw_values = tags.split(",") if isinstance(tags, str) else [
        part for value in tags for part in value.split(",")
    ]

    slugs: list[str] = []
    for value in raw_values:
        slug = value.strip().lower()
        if slug and slug not in slugs:
            slugs.append(slug)
    return slugs


def build_public_query(
    page: int | None = None,
    limit: int | None = None,
    sort_by: str | CounterSortField | None = None,
    sort_order: str | SortOrder | None = None,
    search: str | None = None,
    tags: str | list[str] | None = None,
) -> PublicCounterQuery:
    page = page if page is not None and page >= 1 else DEFAULT_PAGE
    limit = DEFAULT_PAGE_SIZE if limit is None else min(max(limit, 1), MAX_PAGE_SIZE)
    search = search.strip() if search else None

    return PublicCounterQuery(
        page=page,
        limit=limit,
        sort_by=_parse_enum(CounterSortField, sort_by, DEFAULT_SORT_FIELD),
        sort_order=_parse_enum(SortOrder, sort_order, DEFAULT_SORT_ORDER),
        search=search or None,
        tag_slugs=_parse_tag_slugs(tags),
    )
