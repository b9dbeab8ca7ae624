"""Route handlers for the Web API."""

from learnme.web.routes.activity import router as activity_router
from learnme.web.routes.catalog import router as catalog_router
from learnme.web.routes.certifications import router as certifications_router
from learnme.web.routes.challenges import router as challenges_router
from learnme.web.routes.chat import router as chat_router
from learnme.web.routes.code import router as code_router
from learnme.web.routes.dev import router as dev_router
from learnme.web.routes.health import router as health_router
from learnme.web.routes.hints import router as hints_router
from learnme.web.routes.portfolio import router as portfolio_router
from learnme.web.routes.progress import router as progress_router
from learnme.web.routes.users import router as users_router

__all__ = [
    "activity_router",
    "catalog_router",
    "certifications_router",
    "challenges_router",
    "chat_router",
    "code_router",
    "dev_router",
    "health_router",
    "hints_router",
    "portfolio_router",
    "progress_router",
    "users_router",
]
