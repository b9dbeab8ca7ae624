"""Catalog seeding.

Inserts the default languages with three levels each, their courses
(lessons), one exam per lesson, one freestyle project per level and the
default learning paths. Running it again changes nothing.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from learnme.db.catalog_repository import (
    ensure_level,
    get_exam_for_lesson,
    get_freestyle_for_level,
    get_language_by_slug,
    insert_exam,
    insert_freestyle,
    insert_lesson,
    upsert_language,
    upsert_path,
)
from learnme.utils.validators import slugify

logger = structlog.get_logger(__name__)

LANGUAGES = [
    "Python", "JavaScript", "Java", "C#", "C", "C++", "Go", "Rust", "PHP", "TypeScript",
    "Kotlin", "Swift", "Ruby", "Dart", "Scala", "Haskell", "Elixir", "Clojure", "R",
    "MATLAB", "SQL", "Bash", "PowerShell", "Perl", "Lua",
]

LEVELS = (1, 2, 3)

# (slug, title, description, language slugs)
PATHS = [
    (
        "frontend",
        "Frontend Development",
        "Build modern web apps with JavaScript, TypeScript, and UI frameworks.",
        ["javascript", "typescript"],
    ),
    (
        "data-science",
        "Data Science",
        "Analyze data, build models, and visualize insights.",
        ["python", "r", "sql"],
    ),
    (
        "systems",
        "Systems Programming",
        "Low-level, high-performance software and tooling.",
        ["c", "cpp", "rust", "go"],
    ),
    (
        "mobile",
        "Mobile Development",
        "Create iOS and Android apps with Swift, Kotlin, and Dart.",
        ["swift", "kotlin", "dart"],
    ),
]

VARIABLE_TESTS = {
    "python": [
        {
            "name": "Variable Assignment",
            "description": "Check if variables are properly assigned",
            "input": "name = 'Alice'\nage = 25",
            "expectedOutput": "Variables should be assigned correctly",
            "testFunction": "assert 'name' in locals() and 'age' in locals()",
        },
        {
            "name": "Type Checking",
            "description": "Verify correct data types",
            "input": "x = 42\ny = 'hello'",
            "expectedOutput": "x should be int, y should be str",
            "testFunction": "assert type(x) == int and type(y) == str",
        },
    ],
    "javascript": [
        {
            "name": "Variable Declaration",
            "description": "Check if variables are declared with let or const",
            "input": "let name = 'Alice';\nconst age = 25;",
            "expectedOutput": "Variables should be declared correctly",
            "testFunction": "typeof name === 'string' && typeof age === 'number'",
        },
    ],
}


@dataclass
class SeedSummary:
    languages: int = 0
    levels: int = 0
    lessons: int = 0
    exams: int = 0
    freestyles: int = 0
    paths: int = 0


def _courses_for_level(name: str, number: int) -> list[tuple[str, str]]:
    if number == 1:
        return [
            ("Basics & Variables", f"Intro to {name} syntax, variables, and types."),
            ("Control Flow", f"Conditions and loops in {name}."),
        ]
    title = "Functions & Modules" if number == 2 else "Data Structures"
    return [(title, f"Core concepts in {name}.")]


def seed_catalog() -> SeedSummary:
    """Seed languages, levels, lessons, exams, freestyles and paths.

    Returns:
        SeedSummary with the number of rows touched per table
    """
    summary = SeedSummary()

    for name in LANGUAGES:
        language = upsert_language(slugify(name), name)
        summary.languages += 1
        lesson_number = 0

        for number in LEVELS:
            level = ensure_level(language.language_id, number)
            summary.levels += 1

            if get_freestyle_for_level(level.level_id) is None:
                insert_freestyle(
                    level.level_id,
                    f"[{name}] Level {number} Freestyle: "
                    "Combine everything learned to build a small project.",
                )
                summary.freestyles += 1

            for title, content in _courses_for_level(name, number):
                lesson_number += 1
                test_cases = VARIABLE_TESTS.get(language.slug) if lesson_number == 1 else None
                lesson = insert_lesson(
                    language_id=language.language_id,
                    level_id=level.level_id,
                    number=lesson_number,
                    title=title,
                    content=content,
                    difficulty="beginner" if number == 1 else "intermediate",
                    test_cases=test_cases,
                )
                summary.lessons += 1

                if get_exam_for_lesson(lesson.lesson_id) is None:
                    insert_exam(
                        lesson.lesson_id,
                        f"[{name}] Exam for {title}: "
                        "Build a small app demonstrating these skills.",
                    )
                    summary.exams += 1

    for slug, title, description, language_slugs in PATHS:
        found = [s for s in language_slugs if get_language_by_slug(s) is not None]
        missing = sorted(set(language_slugs) - set(found))
        if missing:
            logger.warning("seed_path_missing_languages", path=slug, missing=missing)
        upsert_path(slug, title, description, found)
        summary.paths += 1

    logger.info(
        "catalog_seeded",
        languages=summary.languages,
        lessons=summary.lessons,
        paths=summary.paths,
    )
    return summary
