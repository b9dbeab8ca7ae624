"""Repository functions for the course catalog.

Covers languages, levels, lessons, exams, freestyles and learning paths.

ID conventions:
- language_id: language slug ("python", "cpp")
- level_id: "{slug}-l{N}"
- lesson_id: "{slug}-l{N}-{NN}" (NN = lesson number within the language)
- exam_id: "{lesson_id}-exam"
- freestyle_id: "{level_id}-freestyle"
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import structlog

from learnme.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class LanguageRecord:
    language_id: str
    slug: str
    name: str


@dataclass
class LevelRecord:
    level_id: str
    language_id: str
    number: int


@dataclass
class LessonRecord:
    """Lesson record from database."""

    lesson_id: str
    language_id: str
    level_id: str | None
    number: int
    title: str
    content: str
    difficulty: str
    test_cases: list[dict[str, Any]] | None = None


@dataclass
class ExamRecord:
    exam_id: str
    lesson_id: str
    prompt: str


@dataclass
class FreestyleRecord:
    freestyle_id: str
    level_id: str
    prompt: str


@dataclass
class PathRecord:
    slug: str
    title: str
    description: str
    language_ids: list[str] = field(default_factory=list)


# =============================================================================
# LANGUAGES & LEVELS
# =============================================================================


def upsert_language(slug: str, name: str) -> LanguageRecord:
    """Insert a language or update its display name."""
    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO languages (language_id, slug, name) VALUES (?, ?, ?)
            ON CONFLICT(slug) DO UPDATE SET name = excluded.name
            """,
            (slug, slug, name),
        )

    return LanguageRecord(language_id=slug, slug=slug, name=name)


def get_language_by_slug(slug: str) -> LanguageRecord | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM languages WHERE slug = ?", (slug,)
        ).fetchone()

    if row is None:
        return None
    return LanguageRecord(language_id=row["language_id"], slug=row["slug"], name=row["name"])


def list_languages() -> list[LanguageRecord]:
    """Get all languages ordered by name."""
    with get_db() as conn:
        rows = conn.execute("SELECT * FROM languages ORDER BY name ASC").fetchall()

    return [
        LanguageRecord(language_id=r["language_id"], slug=r["slug"], name=r["name"])
        for r in rows
    ]


def count_languages() -> int:
    with get_db() as conn:
        return conn.execute("SELECT COUNT(*) FROM languages").fetchone()[0]


def ensure_level(language_id: str, number: int) -> LevelRecord:
    level_id = f"{language_id}-l{number}"
    with get_db() as conn:
        conn.execute(
            "INSERT OR IGNORE INTO levels (level_id, language_id, number) VALUES (?, ?, ?)",
            (level_id, language_id, number),
        )

    return LevelRecord(level_id=level_id, language_id=language_id, number=number)


def get_level(level_id: str) -> LevelRecord | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM levels WHERE level_id = ?", (level_id,)
        ).fetchone()

    if row is None:
        return None
    return LevelRecord(level_id=row["level_id"], language_id=row["language_id"], number=row["number"])


def list_levels(language_id: str) -> list[LevelRecord]:
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM levels WHERE language_id = ? ORDER BY number ASC",
            (language_id,),
        ).fetchall()

    return [
        LevelRecord(level_id=r["level_id"], language_id=r["language_id"], number=r["number"])
        for r in rows
    ]


# =============================================================================
# LESSONS
# =============================================================================


def insert_lesson(
    language_id: str,
    level_id: str | None,
    number: int,
    title: str,
    content: str = "",
    difficulty: str = "beginner",
    test_cases: list[dict[str, Any]] | None = None,
) -> LessonRecord:
    """Insert a lesson unless (language, number) already exists.

    Returns:
        The stored LessonRecord (existing one if already present)
    """
    level_part = level_id or f"{language_id}-l0"
    lesson_id = f"{level_part}-{number:02d}"

    with get_db() as conn:
        conn.execute(
            """
            INSERT OR IGNORE INTO lessons (
                lesson_id, language_id, level_id, number, title,
                content, difficulty, test_cases
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                lesson_id,
                language_id,
                level_id,
                number,
                title,
                content,
                difficulty,
                json.dumps(test_cases) if test_cases is not None else None,
            ),
        )
        row = conn.execute(
            "SELECT * FROM lessons WHERE language_id = ? AND number = ?",
            (language_id, number),
        ).fetchone()

    return _row_to_lesson(row)


def get_lesson(lesson_id: str) -> LessonRecord | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM lessons WHERE lesson_id = ?", (lesson_id,)
        ).fetchone()

    return _row_to_lesson(row) if row else None


def list_lessons(language_id: str) -> list[LessonRecord]:
    """Get lessons of a language ordered by number."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM lessons WHERE language_id = ? ORDER BY number ASC",
            (language_id,),
        ).fetchall()

    return [_row_to_lesson(r) for r in rows]


def count_lessons(language_id: str) -> int:
    with get_db() as conn:
        return conn.execute(
            "SELECT COUNT(*) FROM lessons WHERE language_id = ?", (language_id,)
        ).fetchone()[0]


def _row_to_lesson(row) -> LessonRecord:
    return LessonRecord(
        lesson_id=row["lesson_id"],
        language_id=row["language_id"],
        level_id=row["level_id"],
        number=row["number"],
        title=row["title"],
        content=row["content"],
        difficulty=row["difficulty"],
        test_cases=json.loads(row["test_cases"]) if row["test_cases"] else None,
    )


# =============================================================================
# EXAMS & FREESTYLES
# =============================================================================


def get_exam_for_lesson(lesson_id: str) -> ExamRecord | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM exams WHERE lesson_id = ?", (lesson_id,)
        ).fetchone()

    return _row_to_exam(row) if row else None


def insert_exam(lesson_id: str, prompt: str) -> ExamRecord:
    """Insert the exam for a lesson; an existing exam is kept."""
    exam_id = f"{lesson_id}-exam"
    with get_db() as conn:
        conn.execute(
            "INSERT OR IGNORE INTO exams (exam_id, lesson_id, prompt) VALUES (?, ?, ?)",
            (exam_id, lesson_id, prompt),
        )
        row = conn.execute(
            "SELECT * FROM exams WHERE lesson_id = ?", (lesson_id,)
        ).fetchone()

    return _row_to_exam(row)


def _row_to_exam(row) -> ExamRecord:
    return ExamRecord(exam_id=row["exam_id"], lesson_id=row["lesson_id"], prompt=row["prompt"])


def get_freestyle_for_level(level_id: str) -> FreestyleRecord | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM freestyles WHERE level_id = ?", (level_id,)
        ).fetchone()

    return _row_to_freestyle(row) if row else None


def insert_freestyle(level_id: str, prompt: str) -> FreestyleRecord:
    """Insert the freestyle for a level; an existing one is kept."""
    freestyle_id = f"{level_id}-freestyle"
    with get_db() as conn:
        conn.execute(
            "INSERT OR IGNORE INTO freestyles (freestyle_id, level_id, prompt) VALUES (?, ?, ?)",
            (freestyle_id, level_id, prompt),
        )
        row = conn.execute(
            "SELECT * FROM freestyles WHERE level_id = ?", (level_id,)
        ).fetchone()

    return _row_to_freestyle(row)


def _row_to_freestyle(row) -> FreestyleRecord:
    return FreestyleRecord(
        freestyle_id=row["freestyle_id"], level_id=row["level_id"], prompt=row["prompt"]
    )


# =============================================================================
# PATHS
# =============================================================================


def upsert_path(slug: str, title: str, description: str, language_ids: list[str]) -> PathRecord:
    """Insert or update a path and reset its language links."""
    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO paths (slug, title, description) VALUES (?, ?, ?)
            ON CONFLICT(slug) DO UPDATE SET
                title = excluded.title,
                description = excluded.description
            """,
            (slug, title, description),
        )
        conn.execute("DELETE FROM path_languages WHERE path_slug = ?", (slug,))
        conn.executemany(
            "INSERT INTO path_languages (path_slug, language_id, position) VALUES (?, ?, ?)",
            [(slug, language_id, i) for i, language_id in enumerate(language_ids)],
        )

    logger.debug("paths.upserted", slug=slug, languages=len(language_ids))
    return PathRecord(slug=slug, title=title, description=description, language_ids=language_ids)


def get_path(slug: str) -> PathRecord | None:
    with get_db() as conn:
        row = conn.execute("SELECT * FROM paths WHERE slug = ?", (slug,)).fetchone()
        if row is None:
            return None
        links = conn.execute(
            "SELECT language_id FROM path_languages WHERE path_slug = ? ORDER BY position",
            (slug,),
        ).fetchall()

    return PathRecord(
        slug=row["slug"],
        title=row["title"],
        description=row["description"],
        language_ids=[link["language_id"] for link in links],
    )


def list_paths() -> list[PathRecord]:
    with get_db() as conn:
        slugs = [r["slug"] for r in conn.execute("SELECT slug FROM paths ORDER BY title").fetchall()]

    return [path for path in (get_path(slug) for slug in slugs) if path is not None]
