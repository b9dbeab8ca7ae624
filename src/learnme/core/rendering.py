"""HTML rendering for printable documents (certificates, resumes)."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Jinja2 environment over the package's templates/ directory."""
    return Environment(
        loader=PackageLoader("learnme", "templates"),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_template(name: str, **context: Any) -> str:
    """Render a packaged template.

    Raises:
        jinja2.TemplateNotFound: If the template doesn't exist
    """
    return get_environment().get_template(name).render(**context)
