"""Repository functions for lesson progress.

A progress row is unique per (user_id, lesson_id). Marking a lesson complete
twice updates the existing row.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from learnme.db.database import get_db

logger = structlog.get_logger(__name__)

ANONYMOUS_USER = "anonymous"


@dataclass
class ProgressRecord:
    """Progress record from database."""

    progress_id: int
    user_id: str
    lesson_id: str
    completed: bool
    score: int
    completed_at: str | None
    updated_at: str


@dataclass
class ProgressEntry:
    """Progress joined with its lesson and language, for listings."""

    progress: ProgressRecord
    lesson_title: str
    lesson_number: int
    language_slug: str
    language_name: str


def mark_lesson_complete(user_id: str, lesson_id: str, score: int = 100) -> ProgressRecord:
    """Mark a lesson complete for a user (idempotent upsert).

    Raises:
        sqlite3.IntegrityError: If the lesson doesn't exist
    """
    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO progress (user_id, lesson_id, completed, score, completed_at, updated_at)
            VALUES (?, ?, 1, ?, datetime('now'), datetime('now'))
            ON CONFLICT(user_id, lesson_id) DO UPDATE SET
                completed = 1,
                score = excluded.score,
                completed_at = excluded.completed_at,
                updated_at = excluded.updated_at
            """,
            (user_id, lesson_id, score),
        )
        row = conn.execute(
            "SELECT * FROM progress WHERE user_id = ? AND lesson_id = ?",
            (user_id, lesson_id),
        ).fetchone()

    logger.debug("progress.completed", user_id=user_id, lesson_id=lesson_id)
    return _row_to_record(row)


def get_progress(user_id: str, lesson_id: str) -> ProgressRecord | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM progress WHERE user_id = ? AND lesson_id = ?",
            (user_id, lesson_id),
        ).fetchone()

    return _row_to_record(row) if row else None


def list_progress(user_id: str) -> list[ProgressEntry]:
    """Get all progress rows of a user with lesson and language info."""
    with get_db() as conn:
        rows = conn.execute(
            """
            SELECT p.*, l.title AS lesson_title, l.number AS lesson_number,
                   g.slug AS language_slug, g.name AS language_name
            FROM progress p
            JOIN lessons l ON l.lesson_id = p.lesson_id
            JOIN languages g ON g.language_id = l.language_id
            WHERE p.user_id = ?
            ORDER BY g.name, l.number
            """,
            (user_id,),
        ).fetchall()

    return [
        ProgressEntry(
            progress=_row_to_record(row),
            lesson_title=row["lesson_title"],
            lesson_number=row["lesson_number"],
            language_slug=row["language_slug"],
            language_name=row["language_name"],
        )
        for row in rows
    ]


def completion_for_language(user_id: str, language_id: str) -> tuple[int, int]:
    """Count completed lessons and sum of their scores for a language.

    Returns:
        (completed_lessons, total_score)
    """
    with get_db() as conn:
        row = conn.execute(
            """
            SELECT COUNT(*) AS completed, COALESCE(SUM(p.score), 0) AS total_score
            FROM progress p
            JOIN lessons l ON l.lesson_id = p.lesson_id
            WHERE p.user_id = ? AND l.language_id = ? AND p.completed = 1
            """,
            (user_id, language_id),
        ).fetchone()

    return row["completed"], row["total_score"]


def list_completion_dates(user_id: str) -> list[str]:
    """Distinct days ("YYYY-MM-DD", UTC) on which the user completed lessons, newest first."""
    with get_db() as conn:
        rows = conn.execute(
            """
            SELECT DISTINCT date(completed_at) AS day FROM progress
            WHERE user_id = ? AND completed = 1 AND completed_at IS NOT NULL
            ORDER BY day DESC
            """,
            (user_id,),
        ).fetchall()

    return [row["day"] for row in rows]


def count_completed(since: str | None = None) -> int:
    """Count completed progress rows, optionally updated on/after `since`.

    Args:
        since: SQLite datetime string (e.g. "2025-01-01 00:00:00")
    """
    query = "SELECT COUNT(*) FROM progress WHERE completed = 1"
    params: tuple = ()
    if since is not None:
        query += " AND updated_at >= ?"
        params = (since,)

    with get_db() as conn:
        return conn.execute(query, params).fetchone()[0]


def _row_to_record(row) -> ProgressRecord:
    """Convert database row to ProgressRecord."""
    return ProgressRecord(
        progress_id=row["progress_id"],
        user_id=row["user_id"],
        lesson_id=row["lesson_id"],
        completed=bool(row["completed"]),
        score=row["score"],
        completed_at=row["completed_at"],
        updated_at=row["updated_at"],
    )
