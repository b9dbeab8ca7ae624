"""Repository functions for learner activity.

Covers trophies, hint interactions, autosaved code drafts, exam completions
and unlocked achievements.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from learnme.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class TrophyRecord:
    trophy_id: int
    user_id: str
    language_id: str
    exam_id: str | None
    title: str
    description: str
    earned_at: str


@dataclass
class AutosaveRecord:
    user_id: str
    lesson_id: str
    language: str | None
    code: str
    saved_at: str


# =============================================================================
# TROPHIES
# =============================================================================


def award_trophy(
    user_id: str,
    language_id: str,
    title: str,
    description: str,
    exam_id: str | None = None,
) -> tuple[TrophyRecord, bool]:
    """Award a trophy once per (user, language).

    Returns:
        (trophy, created) where created is False if it was already earned
    """
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT OR IGNORE INTO trophies (user_id, language_id, exam_id, title, description)
            VALUES (?, ?, ?, ?, ?)
            """,
            (user_id, language_id, exam_id, title, description),
        )
        created = cursor.rowcount > 0
        row = conn.execute(
            "SELECT * FROM trophies WHERE user_id = ? AND language_id = ?",
            (user_id, language_id),
        ).fetchone()

    if created:
        logger.debug("trophies.awarded", user_id=user_id, language_id=language_id)

    return _row_to_trophy(row), created


def list_trophies(user_id: str) -> list[TrophyRecord]:
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM trophies WHERE user_id = ? ORDER BY earned_at DESC, trophy_id DESC",
            (user_id,),
        ).fetchall()

    return [_row_to_trophy(row) for row in rows]


def _row_to_trophy(row) -> TrophyRecord:
    return TrophyRecord(
        trophy_id=row["trophy_id"],
        user_id=row["user_id"],
        language_id=row["language_id"],
        exam_id=row["exam_id"],
        title=row["title"],
        description=row["description"],
        earned_at=row["earned_at"],
    )


# =============================================================================
# HINT INTERACTIONS
# =============================================================================


def record_hint_interaction(user_id: str, lesson_id: str, hint_id: str, action: str) -> int:
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT INTO hint_interactions (user_id, lesson_id, hint_id, action)
            VALUES (?, ?, ?, ?)
            """,
            (user_id, lesson_id, hint_id, action),
        )
        return cursor.lastrowid


def list_seen_hints(user_id: str, lesson_id: str) -> list[str]:
    """Hint IDs the user already dismissed or applied in a lesson."""
    with get_db() as conn:
        rows = conn.execute(
            """
            SELECT DISTINCT hint_id FROM hint_interactions
            WHERE user_id = ? AND lesson_id = ? AND action IN ('dismiss', 'apply')
            """,
            (user_id, lesson_id),
        ).fetchall()

    return [row["hint_id"] for row in rows]


# =============================================================================
# AUTOSAVES
# =============================================================================


def save_autosave(user_id: str, lesson_id: str, code: str, language: str | None) -> AutosaveRecord:
    """Store the latest code draft for a lesson (one per user and lesson)."""
    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO autosaves (user_id, lesson_id, language, code, saved_at)
            VALUES (?, ?, ?, ?, datetime('now'))
            ON CONFLICT(user_id, lesson_id) DO UPDATE SET
                language = excluded.language,
                code = excluded.code,
                saved_at = excluded.saved_at
            """,
            (user_id, lesson_id, language, code),
        )
        row = conn.execute(
            "SELECT * FROM autosaves WHERE user_id = ? AND lesson_id = ?",
            (user_id, lesson_id),
        ).fetchone()

    return _row_to_autosave(row)


def get_autosave(user_id: str, lesson_id: str) -> AutosaveRecord | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM autosaves WHERE user_id = ? AND lesson_id = ?",
            (user_id, lesson_id),
        ).fetchone()

    return _row_to_autosave(row) if row else None


def _row_to_autosave(row) -> AutosaveRecord:
    return AutosaveRecord(
        user_id=row["user_id"],
        lesson_id=row["lesson_id"],
        language=row["language"],
        code=row["code"],
        saved_at=row["saved_at"],
    )


# =============================================================================
# EXAM COMPLETIONS
# =============================================================================


def record_exam_completion(user_id: str, exam_id: str) -> bool:
    """Record a passed exam. Returns False if it was already recorded."""
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT OR IGNORE INTO exam_completions (user_id, exam_id) VALUES (?, ?)",
            (user_id, exam_id),
        )
        return cursor.rowcount > 0


def count_exam_completions(user_id: str) -> int:
    with get_db() as conn:
        row = conn.execute(
            "SELECT COUNT(*) AS n FROM exam_completions WHERE user_id = ?", (user_id,)
        ).fetchone()

    return row["n"]


# =============================================================================
# ACHIEVEMENTS
# =============================================================================


def unlock_achievement(user_id: str, achievement_id: str) -> str:
    """Store an unlocked achievement once. Returns its unlock timestamp."""
    with get_db() as conn:
        conn.execute(
            "INSERT OR IGNORE INTO user_achievements (user_id, achievement_id) VALUES (?, ?)",
            (user_id, achievement_id),
        )
        row = conn.execute(
            """
            SELECT unlocked_at FROM user_achievements
            WHERE user_id = ? AND achievement_id = ?
            """,
            (user_id, achievement_id),
        ).fetchone()

    logger.debug("achievements.unlocked", user_id=user_id, achievement_id=achievement_id)
    return row["unlocked_at"]


def list_unlocked_achievements(user_id: str) -> dict[str, str]:
    """Map of achievement id -> unlock timestamp for a user."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT achievement_id, unlocked_at FROM user_achievements WHERE user_id = ?",
            (user_id,),
        ).fetchall()

    return {row["achievement_id"]: row["unlocked_at"] for row in rows}
