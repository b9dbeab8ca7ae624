"""SQLite database connection and schema management.

Provides connection management and schema initialization for LearnMe.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import structlog

logger = structlog.get_logger(__name__)

# Default database location
DEFAULT_DB_PATH = Path("db/learnme.db")

# Current database path (module-level, set by init_db)
_db_path: Path | None = None


def init_db(db_path: Path | None = None) -> None:
    """Initialize database with schema.

    Creates the database file and all required tables if they don't exist.

    Args:
        db_path: Path to database file. Defaults to db/learnme.db
    """
    global _db_path
    _db_path = db_path or DEFAULT_DB_PATH

    _db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db() as conn:
        _create_schema(conn)

    logger.info("database.initialized", path=str(_db_path))


def is_initialized() -> bool:
    """Whether init_db() has selected a database in this process."""
    return _db_path is not None


def get_db_path() -> Path:
    return _db_path or DEFAULT_DB_PATH


@contextmanager
def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Get database connection as context manager.

    Yields:
        SQLite connection with row factory set to sqlite3.Row

    Example:
        with get_db() as conn:
            rows = conn.execute("SELECT * FROM languages").fetchall()
    """
    db_path = get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")

    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _create_schema(conn: sqlite3.Connection) -> None:
    """Create database schema.

    Uses IF NOT EXISTS for idempotency.
    """
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS users (
            user_id TEXT PRIMARY KEY,
            name TEXT,
            email TEXT UNIQUE,
            bio TEXT,
            location TEXT,
            website TEXT,
            github TEXT,
            linkedin TEXT,
            favorite_languages TEXT NOT NULL DEFAULT '[]',
            theme TEXT NOT NULL DEFAULT 'system',
            auto_save INTEGER NOT NULL DEFAULT 1,
            show_hints INTEGER NOT NULL DEFAULT 1,
            learning_level TEXT NOT NULL DEFAULT 'beginner'
                CHECK(learning_level IN ('beginner', 'intermediate', 'advanced')),
            preferred_pace TEXT NOT NULL DEFAULT 'normal',
            created_at TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at TEXT NOT NULL DEFAULT (datetime('now'))
        );

        CREATE TABLE IF NOT EXISTS languages (
            language_id TEXT PRIMARY KEY,
            slug TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS levels (
            level_id TEXT PRIMARY KEY,
            language_id TEXT NOT NULL REFERENCES languages(language_id) ON DELETE CASCADE,
            number INTEGER NOT NULL,
            UNIQUE(language_id, number)
        );

        CREATE TABLE IF NOT EXISTS lessons (
            lesson_id TEXT PRIMARY KEY,
            language_id TEXT NOT NULL REFERENCES languages(language_id) ON DELETE CASCADE,
            level_id TEXT REFERENCES levels(level_id) ON DELETE SET NULL,
            number INTEGER NOT NULL,
            title TEXT NOT NULL,
            content TEXT NOT NULL DEFAULT '',
            difficulty TEXT NOT NULL DEFAULT 'beginner',
            test_cases TEXT,
            UNIQUE(language_id, number)
        );

        -- One exam per lesson
        CREATE TABLE IF NOT EXISTS exams (
            exam_id TEXT PRIMARY KEY,
            lesson_id TEXT NOT NULL UNIQUE REFERENCES lessons(lesson_id) ON DELETE CASCADE,
            prompt TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS freestyles (
            freestyle_id TEXT PRIMARY KEY,
            level_id TEXT NOT NULL UNIQUE REFERENCES levels(level_id) ON DELETE CASCADE,
            prompt TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS paths (
            slug TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT ''
        );

        CREATE TABLE IF NOT EXISTS path_languages (
            path_slug TEXT NOT NULL REFERENCES paths(slug) ON DELETE CASCADE,
            language_id TEXT NOT NULL REFERENCES languages(language_id) ON DELETE CASCADE,
            position INTEGER NOT NULL DEFAULT 0,
            PRIMARY KEY (path_slug, language_id)
        );

        -- progress.user_id may be "anonymous", so no FK to users
        CREATE TABLE IF NOT EXISTS progress (
            progress_id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT NOT NULL,
            lesson_id TEXT NOT NULL REFERENCES lessons(lesson_id) ON DELETE CASCADE,
            completed INTEGER NOT NULL DEFAULT 0,
            score INTEGER NOT NULL DEFAULT 100,
            completed_at TEXT,
            updated_at TEXT NOT NULL DEFAULT (datetime('now')),
            UNIQUE(user_id, lesson_id)
        );

        CREATE TABLE IF NOT EXISTS certifications (
            certificate_id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
            title TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            language TEXT NOT NULL,
            score INTEGER NOT NULL DEFAULT 0,
            issued_at TEXT NOT NULL DEFAULT (datetime('now')),
            expires_at TEXT,
            certificate_url TEXT NOT NULL,
            is_verified INTEGER NOT NULL DEFAULT 1,
            UNIQUE(user_id, language)
        );

        CREATE TABLE IF NOT EXISTS projects (
            project_id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
            title TEXT NOT NULL,
            description TEXT NOT NULL,
            technologies TEXT NOT NULL DEFAULT '[]',
            github_url TEXT,
            live_url TEXT,
            image_url TEXT,
            is_public INTEGER NOT NULL DEFAULT 1,
            created_at TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at TEXT NOT NULL DEFAULT (datetime('now'))
        );

        CREATE TABLE IF NOT EXISTS skills (
            skill_id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
            name TEXT NOT NULL,
            category TEXT NOT NULL,
            proficiency INTEGER NOT NULL CHECK(proficiency BETWEEN 1 AND 5),
            years_of_experience REAL
        );

        CREATE TABLE IF NOT EXISTS trophies (
            trophy_id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
            language_id TEXT NOT NULL REFERENCES languages(language_id) ON DELETE CASCADE,
            exam_id TEXT REFERENCES exams(exam_id) ON DELETE SET NULL,
            title TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            earned_at TEXT NOT NULL DEFAULT (datetime('now')),
            UNIQUE(user_id, language_id)
        );

        CREATE TABLE IF NOT EXISTS hint_interactions (
            interaction_id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT NOT NULL,
            lesson_id TEXT NOT NULL,
            hint_id TEXT NOT NULL,
            action TEXT NOT NULL,
            created_at TEXT NOT NULL DEFAULT (datetime('now'))
        );

        CREATE TABLE IF NOT EXISTS autosaves (
            user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
            lesson_id TEXT NOT NULL,
            language TEXT,
            code TEXT NOT NULL,
            saved_at TEXT NOT NULL DEFAULT (datetime('now')),
            PRIMARY KEY (user_id, lesson_id)
        );

        CREATE TABLE IF NOT EXISTS exam_completions (
            user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
            exam_id TEXT NOT NULL REFERENCES exams(exam_id) ON DELETE CASCADE,
            completed_at TEXT NOT NULL DEFAULT (datetime('now')),
            PRIMARY KEY (user_id, exam_id)
        );

        CREATE TABLE IF NOT EXISTS user_achievements (
            user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
            achievement_id TEXT NOT NULL,
            unlocked_at TEXT NOT NULL DEFAULT (datetime('now')),
            PRIMARY KEY (user_id, achievement_id)
        );

        -- Indexes
        CREATE INDEX IF NOT EXISTS idx_lessons_language ON lessons(language_id);
        CREATE INDEX IF NOT EXISTS idx_progress_user ON progress(user_id);
        CREATE INDEX IF NOT EXISTS idx_projects_user ON projects(user_id);
        CREATE INDEX IF NOT EXISTS idx_skills_user ON skills(user_id);
        """
    )
