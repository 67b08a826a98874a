import re
import time
import unicodedata

from app.db.repositories.counters import slug_exists
from app.utils.logger import logger

FALLBACK_SLUG = "untitled"
MAX_SLUG_LENGTH = 80
MAX_NUMBERED_ATTEMPTS = 10
MIN_SLUG_LENGTH = 3
SHORT_SLUG_SUFFIX = "counter"
# room left for "-<suffix>" inside MAX_SLUG_LENGTH
_BASE_SLUG_LENGTH = 64

_STRIPPED_CHARS_RE = re.compile(r"[!\"#$%&'()*+,./:;<=>?@\[\\\]^`{|}~]")
_SEPARATOR_RE = re.compile(r"[\s_-]+")
_INVALID_RE = re.compile(r"[^a-z0-9-]")


def slugify(text: str | None) -> str:
    if not text:
        return FALLBACK_SLUG

    normalized = unicodedata.normalize("NFKD", text)
    normalized = normalized.encode("ascii", "ignore").decode("ascii").lower()
    normalized = _STRIPPED_CHARS_RE.sub("", normalized)
    normalized = _SEPARATOR_RE.sub("-", normalized.strip())
    normalized = _INVALID_RE.sub("", normalized)
    normalized = re.sub(r"-{2,}", "-", normalized)
    normalized = normalized[:_BASE_SLUG_LENGTH].strip("-")

    if not normalized:
        return FALLBACK_SLUG
    if len(normalized) < MIN_SLUG_LENGTH:
        return f"{normalized}-{SHORT_SLUG_SUFFIX}"
    return normalized


def generate_unique_slug(db, source_text: str | None, exclude_id: str | None = None) -> str:
    """Derive a slug from ``source_text`` that no other counter currently uses.

    ``exclude_id`` lets a counter keep its own slug when it is updated.
    Nothing is reserved here: the unique constraint on ``counters.slug``
    stays the final authority and callers must handle the conflict on write.
    """
    base = slugify(source_text)
    if not slug_exists(db, base, exclude_id):
        return base

    for suffix in range(2, MAX_NUMBERED_ATTEMPTS + 2):
        candidate = f"{base}-{suffix}"
        if not slug_exists(db, candidate, exclude_id):
            return candidate

    candidate = f"{base}-{int(time.time() * 1000):x}"
    logger.warning(f"Slug '{base}' exhausted numbered suffixes, using '{candidate}'")
    return candidate
