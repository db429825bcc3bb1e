"""
Slug generation.

Slugs are derived from a record's title or name and are unique per kind.
Collisions are rejected rather than disambiguated with a numeric suffix:
the caller must choose a different title.
"""

import re
import unicodedata

from innohub.core.exceptions import ValidationError

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def generate_slug(title: str) -> str:
    """
    Create a URL-safe slug from text.

    Accents are folded to ASCII, the text is lower-cased, and every run of
    characters other than letters and digits becomes a single hyphen.

        >>> generate_slug("Cool App 2.0!!")
        'cool-app-2-0'
    """
    folded = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    return _NON_SLUG_CHARS.sub("-", folded.lower()).strip("-")


def require_slug(title: str, field: str = "title") -> str:
    """
    Generate a slug, rejecting titles that contain no slug characters.

    Raises:
        ValidationError: If the title yields an empty slug
    """
    slug = generate_slug(title)
    if not slug:
        raise ValidationError(
            f"The {field} must contain at least one letter or digit.",
            errors={field: title},
        )
    return slug
