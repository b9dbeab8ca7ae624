"""Database module for SQLite persistence.

Provides:
- Database connection management
- Schema initialization
- Repository functions per table group (users, catalog, progress,
  certifications, portfolio, activity)
- Catalog seeding
"""

from learnme.db.database import get_db, init_db

__all__ = ["get_db", "init_db"]
