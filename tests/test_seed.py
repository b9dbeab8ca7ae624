"""Tests for catalog seeding."""

from learnme.db.catalog_repository import (
    count_lessons,
    get_exam_for_lesson,
    get_freestyle_for_level,
    get_lesson,
    get_path,
    list_languages,
    list_lessons,
    list_paths,
)
from learnme.db.seed import LANGUAGES, seed_catalog


class TestSeedCatalog:
    """Tests for seed_catalog()."""

    def test_summary(self):
        summary = seed_catalog()
        assert summary.languages == len(LANGUAGES)
        assert summary.levels == len(LANGUAGES) * 3
        assert summary.lessons == len(LANGUAGES) * 4
        assert summary.exams == len(LANGUAGES) * 4
        assert summary.freestyles == len(LANGUAGES) * 3
        assert summary.paths == 4

    def test_idempotent(self):
        seed_catalog()
        again = seed_catalog()
        assert again.exams == 0
        assert again.freestyles == 0
        assert len(list_languages()) == len(LANGUAGES)
        assert count_lessons("python") == 4

    def test_slug_overrides(self):
        seed_catalog()
        slugs = {language.slug for language in list_languages()}
        assert {"cpp", "csharp", "c", "javascript"} <= slugs

    def test_lessons_numbered_per_language(self):
        seed_catalog()
        lessons = list_lessons("python")
        assert [l.lesson_id for l in lessons] == [
            "python-l1-01",
            "python-l1-02",
            "python-l2-03",
            "python-l3-04",
        ]
        assert [l.difficulty for l in lessons] == [
            "beginner",
            "beginner",
            "intermediate",
            "intermediate",
        ]

    def test_variable_tests_on_first_lesson(self):
        seed_catalog()
        assert get_lesson("python-l1-01").test_cases[0]["name"] == "Variable Assignment"
        assert get_lesson("javascript-l1-01").test_cases[0]["name"] == "Variable Declaration"
        assert get_lesson("python-l1-02").test_cases is None
        assert get_lesson("go-l1-01").test_cases is None

    def test_exams_and_freestyles(self):
        seed_catalog()
        assert get_exam_for_lesson("rust-l2-03").prompt == (
            "[Rust] Exam for Functions & Modules: Build a small app demonstrating these skills."
        )
        assert get_freestyle_for_level("rust-l3").prompt.startswith("[Rust] Level 3 Freestyle")

    def test_paths(self):
        seed_catalog()
        assert {p.slug for p in list_paths()} == {"frontend", "data-science", "systems", "mobile"}
        assert get_path("systems").language_ids == ["c", "cpp", "rust", "go"]
        assert get_path("mobile").language_ids == ["swift", "kotlin", "dart"]
