from datetime import date

import pytest

from app.db.models import Counter
from app.services import slugs
from app.services.slugs import generate_unique_slug, slugify


@pytest.mark.parametrize(
    "text, expected",
    [
        ("My Daily Run", "my-daily-run"),
        ("  Hello,   World!  ", "hello-world"),
        ("Quit_smoking -- day one", "quit-smoking-day-one"),
        ("Café au lait", "cafe-au-lait"),
        ("100% (sober)", "100-sober"),
        ("", "untitled"),
        (None, "untitled"),
        ("!!!", "untitled"),
        ("A", "a-counter"),
        ("Go", "go-counter"),
        ("Run", "run"),
    ],
)
def test_slugify(text, expected):
    assert slugify(text) == expected


def test_slugify_caps_length_without_trailing_hyphen():
    slug = slugify("word " * 40)

    assert len(slug) <= slugs.MAX_SLUG_LENGTH
    assert not slug.endswith("-")


def _add_counter(db, user_id, slug):
    counter = Counter(user_id=user_id, name=slug, start_date=date(2024, 1, 1), slug=slug)
    db.add(counter)
    db.commit()
    return counter


def test_generate_unique_slug_returns_base_when_free(db, users):
    assert generate_unique_slug(db, "My Daily Run") == "my-daily-run"


def test_generate_unique_slug_appends_increasing_suffix(db, users):
    _add_counter(db, users["alice"], "my-daily-run")
    assert generate_unique_slug(db, "My Daily Run") == "my-daily-run-2"

    _add_counter(db, users["alice"], "my-daily-run-2")
    assert generate_unique_slug(db, "My Daily Run") == "my-daily-run-3"


def test_generate_unique_slug_ignores_excluded_counter(db, users):
    own = _add_counter(db, users["alice"], "my-daily-run")

    assert generate_unique_slug(db, "My Daily Run", exclude_id=own.id) == "my-daily-run"


def test_generate_unique_slug_falls_back_to_time_suffix(db, users, monkeypatch):
    _add_counter(db, users["alice"], "run")
    for suffix in range(2, slugs.MAX_NUMBERED_ATTEMPTS + 2):
        _add_counter(db, users["alice"], f"run-{suffix}")

    monkeypatch.setattr(slugs.time, "time", lambda: 1700000000.0)

    assert generate_unique_slug(db, "Run") == f"run-{1700000000000:x}"


def test_short_names_still_get_valid_slugs(db, users, make_counter):
    first = make_counter(name="A")
    second = make_counter(name="A")

    assert first.slug == "a-counter"
    assert second.slug == "a-counter-2"
    assert all(len(slug) >= 3 for slug in (first.slug, second.slug))
