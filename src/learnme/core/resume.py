"""Resume generation from a learner's portfolio.

Collects profile, skills, public projects, verified certifications and
trophies into ResumeData and renders it as a printable HTML page.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

import structlog

from learnme.config import load_app_config
from learnme.core.rendering import render_template
from learnme.db.activity_repository import list_trophies
from learnme.db.certifications_repository import list_certifications
from learnme.db.portfolio_repository import list_projects, list_skills
from learnme.db.users_repository import UserRecord
from learnme.utils.text_utils import iso_date

logger = structlog.get_logger(__name__)

SKILL_CATEGORIES = ("programming", "framework", "tool", "soft-skill")

MAX_PROJECTS = 5
MAX_ACHIEVEMENTS = 10
MAX_EXPERIENCE = 3

# Accent colour per resume template
TEMPLATES = {
    "modern": "#2563eb",
    "classic": "#2c3e50",
    "creative": "#7c3aed",
    "minimal": "#111827",
}
DEFAULT_TEMPLATE = "modern"


@dataclass
class PersonalInfo:
    name: str
    email: str
    location: str | None = None
    website: str | None = None
    github: str | None = None
    linkedin: str | None = None
    bio: str | None = None


@dataclass
class EducationEntry:
    institution: str
    degree: str
    field: str
    start_date: str
    end_date: str | None = None
    description: str | None = None


@dataclass
class ExperienceEntry:
    company: str
    position: str
    start_date: str
    description: str
    technologies: list[str]
    end_date: str | None = None


@dataclass
class SkillGroup:
    category: str
    skills: list[str]


@dataclass
class ResumeProject:
    title: str
    description: str
    technologies: list[str]
    github_url: str | None = None
    live_url: str | None = None


@dataclass
class ResumeCertification:
    title: str
    issuer: str
    date: str
    description: str | None = None


@dataclass
class Achievement:
    title: str
    description: str
    date: str


@dataclass
class ResumeData:
    personal_info: PersonalInfo
    education: list[EducationEntry] = field(default_factory=list)
    experience: list[ExperienceEntry] = field(default_factory=list)
    skills: list[SkillGroup] = field(default_factory=list)
    projects: list[ResumeProject] = field(default_factory=list)
    certifications: list[ResumeCertification] = field(default_factory=list)
    achievements: list[Achievement] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """JSON form with camelCase keys."""
        return _camelize(asdict(self))


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _camelize(value: Any) -> Any:
    if isinstance(value, dict):
        return {_camel(k): _camelize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_camelize(v) for v in value]
    return value


def category_label(category: str) -> str:
    """Display label for a skill category (soft-skill -> Soft skill)."""
    return category[:1].upper() + category[1:].replace("-", " ")


def build_resume(
    user: UserRecord,
    include_projects: bool = True,
    include_certifications: bool = True,
) -> ResumeData:
    """Assemble resume data for a user.

    Args:
        user: Resume owner
        include_projects: Add public projects (and experience derived from them)
        include_certifications: Add verified certifications

    Returns:
        ResumeData
    """
    member_since = iso_date(user.created_at)
    issuer = load_app_config().certificates.issuer

    resume = ResumeData(
        personal_info=PersonalInfo(
            name=user.name or "Your Name",
            email=user.email or "",
            location=user.location,
            website=user.website,
            github=user.github,
            linkedin=user.linkedin,
            bio=user.bio,
        ),
        education=[
            EducationEntry(
                institution=issuer,
                degree="Self-Taught Developer",
                field="Software Development",
                start_date=member_since,
                description=(
                    "Comprehensive programming education through interactive "
                    "lessons and project-based learning"
                ),
            )
        ],
    )

    # list_skills is already ordered by proficiency, highest first
    skills = list_skills(user.user_id)
    for category in SKILL_CATEGORIES:
        names = [s.name for s in skills if s.category == category]
        if names:
            resume.skills.append(SkillGroup(category=category_label(category), skills=names))

    if include_projects:
        resume.projects = [
            ResumeProject(
                title=p.title,
                description=p.description,
                technologies=list(p.technologies),
                github_url=p.github_url,
                live_url=p.live_url,
            )
            for p in list_projects(user.user_id, public_only=True)
        ][:MAX_PROJECTS]

    if include_certifications:
        resume.certifications = [
            ResumeCertification(
                title=c.title,
                issuer=issuer,
                date=iso_date(c.issued_at),
                description=c.description,
            )
            for c in list_certifications(user.user_id)
            if c.is_verified
        ]

    resume.achievements = [
        Achievement(title=t.title, description=t.description, date=iso_date(t.earned_at))
        for t in list_trophies(user.user_id)
    ][:MAX_ACHIEVEMENTS]

    resume.experience = [
        ExperienceEntry(
            company="Personal Projects",
            position="Full Stack Developer",
            start_date=member_since,
            description=p.description,
            technologies=p.technologies,
        )
        for p in resume.projects[:MAX_EXPERIENCE]
    ]

    logger.debug(
        "resume_built",
        user_id=user.user_id,
        projects=len(resume.projects),
        certifications=len(resume.certifications),
        achievements=len(resume.achievements),
    )
    return resume


def render_resume_html(data: ResumeData, template: str = DEFAULT_TEMPLATE) -> str:
    """Render the resume page. Unknown templates fall back to "modern"."""
    accent = TEMPLATES.get(template, TEMPLATES[DEFAULT_TEMPLATE])
    return render_template("resume.html", data=data, accent=accent)
