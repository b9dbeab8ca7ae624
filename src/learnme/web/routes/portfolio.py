"""Portfolio endpoints: projects, skills and resume generation."""

import structlog
from fastapi import APIRouter, Depends, Query, status

from learnme.core.resume import build_resume, render_resume_html
from learnme.db.portfolio_repository import (
    ProjectRecord,
    SkillRecord,
    insert_project,
    insert_skill,
    list_projects,
    list_skills,
)
from learnme.db.users_repository import UserRecord
from learnme.web.deps import require_user
from learnme.web.schemas import (
    ProjectCreate,
    ProjectEnvelope,
    ProjectListResponse,
    ProjectResponse,
    ResumeRequest,
    ResumeResponse,
    SkillCreate,
    SkillEnvelope,
    SkillListResponse,
    SkillResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["portfolio"])


def _project(record: ProjectRecord) -> ProjectResponse:
    return ProjectResponse(
        id=record.project_id,
        title=record.title,
        description=record.description,
        technologies=record.technologies,
        github_url=record.github_url,
        live_url=record.live_url,
        image_url=record.image_url,
        is_public=record.is_public,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def _skill(record: SkillRecord) -> SkillResponse:
    return SkillResponse(
        id=record.skill_id,
        name=record.name,
        category=record.category,
        proficiency=record.proficiency,
        years_of_experience=record.years_of_experience,
    )


@router.get("/api/portfolio/projects", response_model=ProjectListResponse)
async def get_projects(
    public: bool = Query(default=False),
    user: UserRecord = Depends(require_user),
) -> ProjectListResponse:
    """List the caller's projects; ?public=true keeps only public ones."""
    return ProjectListResponse(
        projects=[_project(p) for p in list_projects(user.user_id, public_only=public)]
    )


@router.post(
    "/api/portfolio/projects",
    response_model=ProjectEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectCreate,
    user: UserRecord = Depends(require_user),
) -> ProjectEnvelope:
    """Add a project to the caller's portfolio."""
    project = insert_project(
        user_id=user.user_id,
        title=body.title,
        description=body.description,
        technologies=body.technologies,
        github_url=body.github_url,
        live_url=body.live_url,
        image_url=body.image_url,
        is_public=body.is_public,
    )
    return ProjectEnvelope(project=_project(project))


@router.get("/api/portfolio/skills", response_model=SkillListResponse)
async def get_skills(user: UserRecord = Depends(require_user)) -> SkillListResponse:
    """List the caller's skills, highest proficiency first."""
    return SkillListResponse(skills=[_skill(s) for s in list_skills(user.user_id)])


@router.post(
    "/api/portfolio/skills",
    response_model=SkillEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_skill(
    body: SkillCreate,
    user: UserRecord = Depends(require_user),
) -> SkillEnvelope:
    """Add a skill. Proficiency outside 1..5 is rejected with 422."""
    skill = insert_skill(
        user_id=user.user_id,
        name=body.name,
        category=body.category,
        proficiency=body.proficiency,
        years_of_experience=body.years_of_experience,
    )
    return SkillEnvelope(skill=_skill(skill))


@router.post("/api/resume/generate", response_model=ResumeResponse)
async def generate_resume(
    body: ResumeRequest,
    user: UserRecord = Depends(require_user),
) -> ResumeResponse:
    """Build the caller's resume as data and printable HTML."""
    resume = build_resume(
        user,
        include_projects=body.include_projects,
        include_certifications=body.include_certifications,
    )
    logger.info("resume_generated", user_id=user.user_id, template=body.template)
    return ResumeResponse(
        resume_data=resume.to_dict(),
        html=render_resume_html(resume, body.template),
    )
