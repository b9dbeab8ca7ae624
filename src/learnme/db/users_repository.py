"""Repository functions for the users table."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from typing import Any

import structlog

from learnme.db.database import get_db

logger = structlog.get_logger(__name__)

# Columns that PUT /api/user/preferences may change
PREFERENCE_FIELDS = (
    "favorite_languages",
    "theme",
    "auto_save",
    "show_hints",
    "learning_level",
    "preferred_pace",
)


@dataclass
class UserRecord:
    """User record from database."""

    user_id: str
    name: str | None
    email: str | None
    bio: str | None
    location: str | None
    website: str | None
    github: str | None
    linkedin: str | None
    favorite_languages: list[str] = field(default_factory=list)
    theme: str = "system"
    auto_save: bool = True
    show_hints: bool = True
    learning_level: str = "beginner"
    preferred_pace: str = "normal"
    created_at: str = ""
    updated_at: str = ""

    @property
    def display_name(self) -> str:
        return self.name or self.email or "Student"


def create_user(
    name: str | None,
    email: str | None,
    bio: str | None = None,
    location: str | None = None,
    website: str | None = None,
    github: str | None = None,
    linkedin: str | None = None,
) -> UserRecord:
    """Insert a new user.

    Raises:
        sqlite3.IntegrityError: If the email is already registered
    """
    user_id = f"usr{uuid.uuid4().hex[:12]}"

    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO users (user_id, name, email, bio, location, website, github, linkedin)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (user_id, name, email, bio, location, website, github, linkedin),
        )
        row = conn.execute("SELECT * FROM users WHERE user_id = ?", (user_id,)).fetchone()

    logger.debug("users.inserted", user_id=user_id)
    return _row_to_record(row)


def get_user(user_id: str) -> UserRecord | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM users WHERE user_id = ?", (user_id,)
        ).fetchone()

    return _row_to_record(row) if row else None


def get_user_by_email(email: str) -> UserRecord | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM users WHERE email = ?", (email,)
        ).fetchone()

    return _row_to_record(row) if row else None


def update_preferences(user_id: str, changes: dict[str, Any]) -> UserRecord | None:
    """Update preference columns for a user.

    Only keys in PREFERENCE_FIELDS are applied; None values are ignored.

    Returns:
        Updated UserRecord, or None if the user doesn't exist
    """
    updates = {
        key: value
        for key, value in changes.items()
        if key in PREFERENCE_FIELDS and value is not None
    }

    if "favorite_languages" in updates:
        updates["favorite_languages"] = json.dumps(updates["favorite_languages"])
    for flag in ("auto_save", "show_hints"):
        if flag in updates:
            updates[flag] = int(bool(updates[flag]))

    with get_db() as conn:
        if updates:
            assignments = ", ".join(f"{key} = ?" for key in updates)
            cursor = conn.execute(
                f"UPDATE users SET {assignments}, updated_at = datetime('now') "
                "WHERE user_id = ?",
                (*updates.values(), user_id),
            )
            if cursor.rowcount == 0:
                return None

    logger.debug("users.preferences_updated", user_id=user_id, fields=sorted(updates))
    return get_user(user_id)


def count_users() -> int:
    with get_db() as conn:
        return conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]


def _row_to_record(row) -> UserRecord:
    """Convert database row to UserRecord."""
    return UserRecord(
        user_id=row["user_id"],
        name=row["name"],
        email=row["email"],
        bio=row["bio"],
        location=row["location"],
        website=row["website"],
        github=row["github"],
        linkedin=row["linkedin"],
        favorite_languages=json.loads(row["favorite_languages"] or "[]"),
        theme=row["theme"],
        auto_save=bool(row["auto_save"]),
        show_hints=bool(row["show_hints"]),
        learning_level=row["learning_level"],
        preferred_pace=row["preferred_pace"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
