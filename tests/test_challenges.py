"""Tests for exams, freestyle projects and trophies."""

import pytest

from learnme.core.challenges import (
    EXAM_PROMPTS,
    FREESTYLE_PROMPTS,
    ChallengeNotFoundError,
    complete_exam,
    exam_prompt,
    freestyle_prompt,
    get_or_create_exam,
    get_or_create_freestyle,
)
from learnme.db.activity_repository import count_exam_completions, list_trophies
from learnme.db.catalog_repository import ensure_level, insert_lesson, upsert_language


@pytest.fixture
def bare_lesson():
    """A lesson and level with no exam or freestyle yet."""
    upsert_language("python", "Python")
    level = ensure_level("python", 1)
    lesson = insert_lesson("python", level.level_id, 2, "Control Flow")
    return lesson


class TestPrompts:
    def test_exam_prompt_choice(self):
        # len("Control Flow") + len("python-l1-02") = 24 -> index 4
        prompt = exam_prompt("Python", "Control Flow", "python-l1-02")
        assert prompt == f"[Python - Control Flow] {EXAM_PROMPTS[4]}"

    def test_freestyle_prompt_choice(self):
        # 1 + len("python-l1") = 10 -> index 0
        prompt = freestyle_prompt("Python", 1, "python-l1")
        assert prompt == f"[Python - Level 1] {FREESTYLE_PROMPTS[0]}"


class TestGetOrCreateExam:
    """Tests for get_or_create_exam()."""

    def test_created_on_first_access(self, bare_lesson):
        exam = get_or_create_exam(bare_lesson.lesson_id)
        assert exam.exam_id == "python-l1-02-exam"
        assert exam.prompt == exam_prompt("Python", "Control Flow", "python-l1-02")

    def test_stable_on_second_access(self, bare_lesson):
        first = get_or_create_exam(bare_lesson.lesson_id)
        second = get_or_create_exam(bare_lesson.lesson_id)
        assert first == second

    def test_seeded_exam_kept(self, seeded):
        exam = get_or_create_exam("python-l1-01")
        assert exam.prompt.startswith("[Python] Exam for Basics & Variables")

    def test_unknown_lesson(self):
        with pytest.raises(ChallengeNotFoundError, match="Course not found"):
            get_or_create_exam("nope")


class TestGetOrCreateFreestyle:
    def test_created_on_first_access(self, bare_lesson):
        freestyle = get_or_create_freestyle("python-l1")
        assert freestyle.freestyle_id == "python-l1-freestyle"
        assert freestyle.prompt == freestyle_prompt("Python", 1, "python-l1")

    def test_unknown_level(self):
        with pytest.raises(ChallengeNotFoundError, match="Level not found"):
            get_or_create_freestyle("nope-l9")


class TestCompleteExam:
    """Tests for complete_exam()."""

    def test_awards_trophy_once(self, seeded, user):
        first = complete_exam(user.user_id, "python-l1-01")
        assert first.newly_awarded is True
        assert first.trophy.title == "Python Expert Trophy"
        assert first.trophy.description == "Passed the Python exam: Basics & Variables"
        assert first.trophy.exam_id == "python-l1-01-exam"

        second = complete_exam(user.user_id, "python-l2-03")
        assert second.newly_awarded is False
        assert second.trophy.trophy_id == first.trophy.trophy_id

        assert len(list_trophies(user.user_id)) == 1

    def test_one_trophy_per_language(self, seeded, user):
        complete_exam(user.user_id, "python-l1-01")
        complete_exam(user.user_id, "go-l1-01")
        titles = sorted(t.title for t in list_trophies(user.user_id))
        assert titles == ["Go Expert Trophy", "Python Expert Trophy"]

    def test_unknown_lesson(self, user):
        with pytest.raises(ChallengeNotFoundError):
            complete_exam(user.user_id, "nope")

    def test_counts_each_exam_once(self, seeded, user):
        complete_exam(user.user_id, "python-l1-01")
        complete_exam(user.user_id, "python-l1-01")
        complete_exam(user.user_id, "go-l1-01")
        assert count_exam_completions(user.user_id) == 2
