"""Repository functions for portfolio projects and skills."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

import structlog

from learnme.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class ProjectRecord:
    """Portfolio project record."""

    project_id: int
    user_id: str
    title: str
    description: str
    technologies: list[str] = field(default_factory=list)
    github_url: str | None = None
    live_url: str | None = None
    image_url: str | None = None
    is_public: bool = True
    created_at: str = ""
    updated_at: str = ""


@dataclass
class SkillRecord:
    """Skill record."""

    skill_id: int
    user_id: str
    name: str
    category: str
    proficiency: int
    years_of_experience: float | None = None


def insert_project(
    user_id: str,
    title: str,
    description: str,
    technologies: list[str],
    github_url: str | None = None,
    live_url: str | None = None,
    image_url: str | None = None,
    is_public: bool = True,
) -> ProjectRecord:
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT INTO projects (
                user_id, title, description, technologies,
                github_url, live_url, image_url, is_public
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                user_id,
                title,
                description,
                json.dumps(technologies),
                github_url,
                live_url,
                image_url,
                int(is_public),
            ),
        )
        row = conn.execute(
            "SELECT * FROM projects WHERE project_id = ?", (cursor.lastrowid,)
        ).fetchone()

    logger.debug("projects.inserted", project_id=row["project_id"], user_id=user_id)
    return _row_to_project(row)


def list_projects(user_id: str, public_only: bool = False) -> list[ProjectRecord]:
    """Get a user's projects, most recently updated first."""
    query = "SELECT * FROM projects WHERE user_id = ?"
    if public_only:
        query += " AND is_public = 1"
    query += " ORDER BY updated_at DESC, project_id DESC"

    with get_db() as conn:
        rows = conn.execute(query, (user_id,)).fetchall()

    return [_row_to_project(row) for row in rows]


def insert_skill(
    user_id: str,
    name: str,
    category: str,
    proficiency: int,
    years_of_experience: float | None = None,
) -> SkillRecord:
    """Insert a skill.

    Raises:
        sqlite3.IntegrityError: If proficiency is outside 1..5
    """
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT INTO skills (user_id, name, category, proficiency, years_of_experience)
            VALUES (?, ?, ?, ?, ?)
            """,
            (user_id, name, category, proficiency, years_of_experience),
        )
        skill_id = cursor.lastrowid

    logger.debug("skills.inserted", skill_id=skill_id, user_id=user_id)
    return SkillRecord(
        skill_id=skill_id,
        user_id=user_id,
        name=name,
        category=category,
        proficiency=proficiency,
        years_of_experience=years_of_experience,
    )


def list_skills(user_id: str) -> list[SkillRecord]:
    """Get a user's skills, highest proficiency first."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM skills WHERE user_id = ? ORDER BY proficiency DESC, skill_id ASC",
            (user_id,),
        ).fetchall()

    return [
        SkillRecord(
            skill_id=row["skill_id"],
            user_id=row["user_id"],
            name=row["name"],
            category=row["category"],
            proficiency=row["proficiency"],
            years_of_experience=row["years_of_experience"],
        )
        for row in rows
    ]


def _row_to_project(row) -> ProjectRecord:
    return ProjectRecord(
        project_id=row["project_id"],
        user_id=row["user_id"],
        title=row["title"],
        description=row["description"],
        technologies=json.loads(row["technologies"] or "[]"),
        github_url=row["github_url"],
        live_url=row["live_url"],
        image_url=row["image_url"],
        is_public=bool(row["is_public"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
