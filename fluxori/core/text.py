"""Text helpers shared by services."""

import re

_NON_WORD = re.compile(r"[^\w\-]+")
_DASHES = re.compile(r"-{2,}")


def slugify(value: str) -> str:
    """
    Lower-case URL slug: whitespace becomes "-", other punctuation is dropped.

    >>> slugify("  Acme Trading Co. ")
    'acme-trading-co'
    """
    slug = re.sub(r"\s+", "-", value.strip().lower())
    slug = _NON_WORD.sub("", slug)
    slug = _DASHES.sub("-", slug)
    return slug.strip("-")
