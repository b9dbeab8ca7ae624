"""Exams, freestyle projects and trophies.

Each lesson has one exam and each level one freestyle project. Their prompts
are picked from fixed pools the first time they are requested and then kept.
Passing an exam earns the language's trophy (once per language).
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from learnme.db.activity_repository import TrophyRecord, award_trophy, record_exam_completion
from learnme.db.catalog_repository import (
    ExamRecord,
    FreestyleRecord,
    get_exam_for_lesson,
    get_freestyle_for_level,
    get_language_by_slug,
    get_lesson,
    get_level,
    insert_exam,
    insert_freestyle,
)

logger = structlog.get_logger(__name__)

EXAM_PROMPTS = [
    "Build a command-line calculator that supports +, -, *, / and parentheses.",
    "Create a TODO app that saves tasks to a file or database.",
    "Write a number guessing game with difficulty levels and score tracking.",
    "Parse a CSV file and output summary stats (min, max, average).",
    "Implement a tiny REST API with create/read/list endpoints.",
]

FREESTYLE_PROMPTS = [
    "Build a text-based adventure game combining variables, loops, and functions.",
    "Create a mini dashboard that aggregates two different features you learned.",
    "Make a converter (e.g., units or currencies) with validation and history.",
    "Implement a small library and publish docs for it (README + examples).",
    "Scrape or fetch data, transform it, and visualize a simple summary.",
]


class ChallengeNotFoundError(LookupError):
    """The lesson or level behind a challenge doesn't exist."""

    pass


@dataclass
class ExamCompletion:
    exam: ExamRecord
    trophy: TrophyRecord
    newly_awarded: bool


def _language_name(language_id: str) -> str:
    language = get_language_by_slug(language_id)
    return language.name if language else language_id


def exam_prompt(language_name: str, lesson_title: str, lesson_id: str) -> str:
    prompt = EXAM_PROMPTS[(len(lesson_title) + len(lesson_id)) % len(EXAM_PROMPTS)]
    return f"[{language_name} - {lesson_title}] {prompt}"


def freestyle_prompt(language_name: str, level_number: int, level_id: str) -> str:
    prompt = FREESTYLE_PROMPTS[(level_number + len(level_id)) % len(FREESTYLE_PROMPTS)]
    return f"[{language_name} - Level {level_number}] {prompt}"


def get_or_create_exam(lesson_id: str) -> ExamRecord:
    """Get a lesson's exam, creating it on first access.

    Raises:
        ChallengeNotFoundError: If the lesson doesn't exist
    """
    lesson = get_lesson(lesson_id)
    if lesson is None:
        raise ChallengeNotFoundError("Course not found")

    exam = get_exam_for_lesson(lesson_id)
    if exam is not None:
        return exam

    prompt = exam_prompt(_language_name(lesson.language_id), lesson.title, lesson.lesson_id)
    logger.info("exam_created", lesson_id=lesson_id)
    return insert_exam(lesson_id, prompt)


def get_or_create_freestyle(level_id: str) -> FreestyleRecord:
    """Get a level's freestyle project, creating it on first access.

    Raises:
        ChallengeNotFoundError: If the level doesn't exist
    """
    level = get_level(level_id)
    if level is None:
        raise ChallengeNotFoundError("Level not found")

    freestyle = get_freestyle_for_level(level_id)
    if freestyle is not None:
        return freestyle

    prompt = freestyle_prompt(_language_name(level.language_id), level.number, level.level_id)
    logger.info("freestyle_created", level_id=level_id)
    return insert_freestyle(level_id, prompt)


def complete_exam(user_id: str, lesson_id: str) -> ExamCompletion:
    """Record a passed exam and award the language trophy.

    Returns:
        ExamCompletion; newly_awarded is False when the trophy was already held

    Raises:
        ChallengeNotFoundError: If the lesson doesn't exist
    """
    lesson = get_lesson(lesson_id)
    if lesson is None:
        raise ChallengeNotFoundError("Course not found")
    exam = get_or_create_exam(lesson_id)
    record_exam_completion(user_id, exam.exam_id)

    name = _language_name(lesson.language_id)
    trophy, created = award_trophy(
        user_id=user_id,
        language_id=lesson.language_id,
        title=f"{name} Expert Trophy",
        description=f"Passed the {name} exam: {lesson.title}",
        exam_id=exam.exam_id,
    )

    if created:
        logger.info("trophy_awarded", user_id=user_id, language=lesson.language_id)

    return ExamCompletion(exam=exam, trophy=trophy, newly_awarded=created)
