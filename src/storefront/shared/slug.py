"""URL slugs derived from names."""

import re
import unicodedata
from collections.abc import Callable


def parameterize(text: str, separator: str = "-") -> str:
    """Turn free text into a URL-safe, lower-case token.

    Accents are folded to ASCII, runs of anything other than letters, digits,
    hyphens and underscores become a single separator, and separators are
    trimmed from both ends.

        >>> parameterize("Crème Brûlée & Friends!")
        'creme-brulee-friends'
    """
    ascii_text = unicodedata.normalize("NFKD", text or "").encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9\-_]+", separator, ascii_text.lower())
    slug = re.sub(rf"{re.escape(separator)}{{2,}}", separator, slug)
    return slug.strip(separator)


def generate_slug(name: str, exists: Callable[[str], bool]) -> str:
    """Parameterize ``name`` and suffix ``-1``, ``-2``, ... until ``exists`` reports it free.

    ``exists`` is the only source of truth about taken slugs; callers pass a
    repository lookup, tests pass a set's ``__contains__``.
    """
    base_slug = parameterize(name)
    candidate = base_slug
    counter = 1

    while exists(candidate):
        candidate = f"{base_slug}-{counter}"
        counter += 1

    return candidate
