"""Data validation helpers.

ID conventions:
- language slug: lowercase name, runs of non-alphanumerics collapsed to "-"
  ("Visual Basic" -> "visual-basic"), with explicit overrides for names that
  would otherwise collide ("C++" -> "cpp", "C#" -> "csharp")

Functions:
- slugify(name) -> str: Language/path slug from a display name
- resolve_slug(prefix, candidates) -> str: Resolve prefix to unique slug
- validate_email(email) -> bool: Loose email format check
"""

import re

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

SLUG_OVERRIDES = {
    "c++": "cpp",
    "c#": "csharp",
    "f#": "fsharp",
}


class AmbiguousSlugError(Exception):
    """Raised when a slug prefix matches multiple entries."""

    def __init__(self, prefix: str, candidates: list[str]):
        self.prefix = prefix
        self.candidates = candidates
        super().__init__(
            f"Prefix '{prefix}' is ambiguous. Candidates:\n"
            + "\n".join(f"  - {c}" for c in candidates)
        )


class SlugNotFoundError(Exception):
    """Raised when no entry matches the given prefix."""

    def __init__(self, prefix: str):
        self.prefix = prefix
        super().__init__(f"Nothing matches prefix '{prefix}'")


def slugify(name: str) -> str:
    """Build a URL slug from a display name.

    Args:
        name: Display name (e.g., "JavaScript", "C++")

    Returns:
        Slug string (e.g., "javascript", "cpp")
    """
    lowered = name.strip().lower()
    if lowered in SLUG_OVERRIDES:
        return SLUG_OVERRIDES[lowered]
    return re.sub(r"[^a-z0-9]+", "-", lowered).strip("-")


def resolve_slug(prefix: str, candidates: list[str]) -> str:
    """Resolve a slug prefix to a unique full slug.

    Args:
        prefix: Partial or full slug (e.g., "java" or "javas")
        candidates: List of all available slugs

    Returns:
        The unique matching slug

    Raises:
        SlugNotFoundError: If no candidates match the prefix
        AmbiguousSlugError: If multiple candidates match the prefix
    """
    # Exact match first
    if prefix in candidates:
        return prefix

    matches = [c for c in candidates if c.startswith(prefix)]

    if len(matches) == 0:
        raise SlugNotFoundError(prefix)
    elif len(matches) == 1:
        return matches[0]
    else:
        raise AmbiguousSlugError(prefix, matches)


def validate_email(email: str) -> bool:
    """Validate email format. Empty string is valid (optional field).

    Args:
        email: Email address to validate

    Returns:
        True if valid email or empty string, False otherwise
    """
    if not email:
        return True
    return bool(EMAIL_PATTERN.match(email))
