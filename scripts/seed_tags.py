import argparse

from sqlalchemy.exc import IntegrityError

from app.db.models.tag import Tag
from app.db.repositories.tags import get_tag_by_slug
from app.db.session import SessionLocal

DEFAULT_TAGS = [
    ("Personal", "personal"),
    ("Work", "work"),
    ("Health", "health"),
    ("Technology", "technology"),
    ("Finance", "finance"),
    ("Entertainment", "entertainment"),
    ("Travel", "travel"),
    ("Education", "education"),
    ("Other", "other"),
]


def seed_tags(db, tags: list[tuple[str, str]]) -> int:
    created = 0
    for name, slug in tags:
        if get_tag_by_slug(db, slug) is not None:
            continue
        db.add(Tag(name=name, slug=slug))
        created += 1

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise RuntimeError("Tag seed conflicts with existing tag names")

    return created


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Insert the default counter tags. Existing slugs are left untouched."
    )
    parser.parse_args()

    with SessionLocal() as db:
        created = seed_tags(db, DEFAULT_TAGS)

    print(f"Seeded {created} new tag(s); {len(DEFAULT_TAGS) - created} already present.")


if __name__ == "__main__":
    main()
