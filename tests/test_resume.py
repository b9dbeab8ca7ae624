"""Tests for resume building and rendering."""

import pytest

from learnme.core.challenges import complete_exam
from learnme.core.certificates import issue_certificate
from learnme.core.resume import (
    MAX_EXPERIENCE,
    MAX_PROJECTS,
    TEMPLATES,
    build_resume,
    category_label,
    render_resume_html,
)
from learnme.db.catalog_repository import list_lessons
from learnme.db.portfolio_repository import insert_project, insert_skill
from learnme.db.progress_repository import mark_lesson_complete
from learnme.db.users_repository import create_user


class TestCategoryLabel:
    def test_labels(self):
        assert category_label("programming") == "Programming"
        assert category_label("soft-skill") == "Soft skill"


class TestBuildResume:
    """Tests for build_resume()."""

    def test_empty_portfolio(self, user):
        resume = build_resume(user)

        assert resume.personal_info.name == "Ana Lopez"
        assert resume.personal_info.email == "ana@example.com"
        assert resume.skills == []
        assert resume.projects == []
        assert resume.experience == []
        assert len(resume.education) == 1
        assert resume.education[0].institution == "LearnMe Platform"
        assert resume.education[0].degree == "Self-Taught Developer"

    def test_placeholder_name(self):
        anonymous = create_user(name=None, email=None)
        resume = build_resume(anonymous)
        assert resume.personal_info.name == "Your Name"
        assert resume.personal_info.email == ""

    def test_skills_grouped_by_category(self, user):
        insert_skill(user.user_id, "Python", "programming", 5)
        insert_skill(user.user_id, "Git", "tool", 4)
        insert_skill(user.user_id, "Rust", "programming", 2)
        insert_skill(user.user_id, "Teamwork", "soft-skill", 3)

        resume = build_resume(user)

        assert [(g.category, g.skills) for g in resume.skills] == [
            ("Programming", ["Python", "Rust"]),
            ("Tool", ["Git"]),
            ("Soft skill", ["Teamwork"]),
        ]

    def test_public_projects_only_and_capped(self, user):
        insert_project(user.user_id, "Secret", "hidden", ["go"], is_public=False)
        for i in range(MAX_PROJECTS + 2):
            insert_project(user.user_id, f"Project {i}", f"desc {i}", ["python"])

        resume = build_resume(user)

        assert len(resume.projects) == MAX_PROJECTS
        assert "Secret" not in [p.title for p in resume.projects]
        assert len(resume.experience) == MAX_EXPERIENCE
        assert resume.experience[0].company == "Personal Projects"
        assert resume.experience[0].position == "Full Stack Developer"

    def test_exclude_projects(self, user):
        insert_project(user.user_id, "App", "desc", ["js"])
        resume = build_resume(user, include_projects=False)
        assert resume.projects == []
        assert resume.experience == []

    def test_certifications_and_achievements(self, seeded, user):
        for lesson in list_lessons("python"):
            mark_lesson_complete(user.user_id, lesson.lesson_id, score=100)
        issue_certificate(user, "python")
        complete_exam(user.user_id, "python-l1-01")

        resume = build_resume(user)
        assert [c.title for c in resume.certifications] == ["PYTHON Programming Course"]
        assert resume.certifications[0].issuer == "LearnMe Platform"
        assert [a.title for a in resume.achievements] == ["Python Expert Trophy"]

        without = build_resume(user, include_certifications=False)
        assert without.certifications == []

    def test_to_dict_camel_case(self, user):
        insert_project(user.user_id, "App", "desc", ["js"], github_url="https://github.com/a/b")
        data = build_resume(user).to_dict()

        assert data["personalInfo"]["name"] == "Ana Lopez"
        assert data["projects"][0]["githubUrl"] == "https://github.com/a/b"
        assert data["education"][0]["startDate"] == user.created_at[:10]


class TestRenderResume:
    def test_contains_sections(self, user):
        insert_skill(user.user_id, "Python", "programming", 5)
        insert_project(user.user_id, "Weather App", "Shows forecasts", ["python"])
        html = render_resume_html(build_resume(user))

        assert "Ana Lopez" in html
        assert "Weather App" in html
        assert "Python" in html
        assert TEMPLATES["modern"] in html

    @pytest.mark.parametrize("template", ["modern", "classic", "creative", "minimal"])
    def test_template_accent(self, user, template):
        html = render_resume_html(build_resume(user), template)
        assert TEMPLATES[template] in html

    def test_unknown_template_falls_back(self, user):
        html = render_resume_html(build_resume(user), "neon")
        assert TEMPLATES["modern"] in html
