import re

SLUG_MAX_LENGTH = 100

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")
_VALID_SLUG = re.compile(r"^[a-z0-9-]{1,100}$")


def slugify(name: str) -> str:
    """Derive a URL-safe slug: lowercase, whitespace to hyphens, drop
    everything outside [a-z0-9-], truncate."""
    slug = _WHITESPACE.sub("-", name.lower())
    slug = _DISALLOWED.sub("", slug)
    return slug[:SLUG_MAX_LENGTH]


def is_valid_slug(slug: str) -> bool:
    return bool(_VALID_SLUG.match(slug))
