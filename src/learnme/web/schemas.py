"""Pydantic schemas for the Web API.

JSON bodies use camelCase keys (lessonId, completedAt, ...). Models accept
either the camelCase alias or the Python field name on input.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(CamelModel):
    status: str
    version: str
    timestamp: str


# =============================================================================
# USER SCHEMAS
# =============================================================================


class UserCreate(CamelModel):
    """Request body for creating a user."""

    name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=200)
    bio: str | None = Field(default=None, max_length=1000)
    location: str | None = None
    website: str | None = None
    github: str | None = None
    linkedin: str | None = None


class UserResponse(CamelModel):
    id: str
    name: str | None
    email: str | None
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    github: str | None = None
    linkedin: str | None = None
    created_at: str


class PreferencesUpdate(CamelModel):
    """Request body for PUT /api/user/preferences. Omitted fields are kept."""

    favorite_languages: list[str] | None = None
    theme: Literal["light", "dark", "system"] | None = None
    auto_save: bool | None = None
    show_hints: bool | None = None
    learning_level: Literal["beginner", "intermediate", "advanced"] | None = None
    preferred_pace: Literal["slow", "normal", "fast"] | None = None


class UserPreferences(CamelModel):
    id: str
    name: str | None
    email: str | None
    favorite_languages: list[str]
    theme: str
    auto_save: bool
    show_hints: bool
    learning_level: str
    preferred_pace: str


class PreferencesResponse(CamelModel):
    success: bool = True
    user: UserPreferences


# =============================================================================
# CATALOG SCHEMAS
# =============================================================================


class ExamResponse(CamelModel):
    id: str
    lesson_id: str
    prompt: str


class LessonSummary(CamelModel):
    id: str
    number: int
    title: str
    difficulty: str
    level_id: str | None
    has_test_cases: bool = False
    exam: ExamResponse | None = None


class LanguageResponse(CamelModel):
    id: str
    slug: str
    name: str
    lessons: list[LessonSummary] = Field(default_factory=list)


class LevelSummary(CamelModel):
    id: str
    number: int
    lessons: list[LessonSummary] = Field(default_factory=list)


class LanguageDetailResponse(CamelModel):
    id: str
    slug: str
    name: str
    levels: list[LevelSummary]


class PathLanguage(CamelModel):
    slug: str
    name: str
    lesson_ids: list[str]


class PathResponse(CamelModel):
    slug: str
    title: str
    description: str
    languages: list[PathLanguage]


class PathListResponse(CamelModel):
    paths: list[PathResponse]
    count: int


# =============================================================================
# PROGRESS SCHEMAS
# =============================================================================


class ProgressCreate(CamelModel):
    lesson_id: str = Field(..., min_length=1)
    score: int = Field(default=100, ge=0, le=100)


class ProgressStatus(CamelModel):
    completed: bool
    completed_at: str | None


class ProgressMarkResponse(CamelModel):
    success: bool = True
    progress: ProgressStatus


class ProgressItem(CamelModel):
    lesson_id: str
    lesson_title: str
    lesson_number: int
    language_slug: str
    language_name: str
    completed: bool
    score: int
    completed_at: str | None


class ProgressListResponse(CamelModel):
    progress: list[ProgressItem]


# =============================================================================
# CERTIFICATION SCHEMAS
# =============================================================================


class CertificationResponse(CamelModel):
    id: str
    title: str
    description: str
    language: str
    score: int
    issued_at: str
    expires_at: str | None
    certificate_url: str
    is_verified: bool


class CertificationListResponse(CamelModel):
    certificates: list[CertificationResponse]


class EligibilityRequest(CamelModel):
    language_slug: str = Field(..., min_length=1)


class EligibilityResponse(CamelModel):
    eligible: bool
    completion_percentage: int
    required: int
    completed_lessons: int
    total_lessons: int


class GenerateCertificateRequest(CamelModel):
    language_slug: str = Field(..., min_length=1)
    course_name: str | None = Field(default=None, max_length=200)


class CertificateData(CamelModel):
    certificate_id: str
    user_name: str
    course_name: str
    language: str
    completion_date: str
    score: int
    total_lessons: int
    completed_lessons: int
    verification_url: str
    issued_by: str


class GenerateCertificateResponse(CamelModel):
    success: bool = True
    certificate: CertificationResponse
    certificate_data: CertificateData
    html: str


class VerifiedCertificate(CamelModel):
    id: str
    title: str
    description: str
    language: str
    issued_at: str
    expires_at: str | None
    user_name: str
    is_verified: bool


class VerificationResponse(CamelModel):
    valid: bool
    certificate: VerifiedCertificate


# =============================================================================
# PORTFOLIO SCHEMAS
# =============================================================================


class ProjectCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    technologies: list[str]
    github_url: str | None = None
    live_url: str | None = None
    image_url: str | None = None
    is_public: bool = True


class ProjectResponse(CamelModel):
    id: int
    title: str
    description: str
    technologies: list[str]
    github_url: str | None
    live_url: str | None
    image_url: str | None
    is_public: bool
    created_at: str
    updated_at: str


class ProjectEnvelope(CamelModel):
    project: ProjectResponse


class ProjectListResponse(CamelModel):
    projects: list[ProjectResponse]


class SkillCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1)
    proficiency: int = Field(..., ge=1, le=5)
    years_of_experience: float | None = Field(default=None, ge=0)


class SkillResponse(CamelModel):
    id: int
    name: str
    category: str
    proficiency: int
    years_of_experience: float | None


class SkillEnvelope(CamelModel):
    skill: SkillResponse


class SkillListResponse(CamelModel):
    skills: list[SkillResponse]


class ResumeRequest(CamelModel):
    template: str = "modern"
    include_projects: bool = True
    include_certifications: bool = True


class ResumeResponse(CamelModel):
    success: bool = True
    resume_data: dict[str, Any]
    html: str


# =============================================================================
# CHAT SCHEMAS
# =============================================================================


class ChatRequest(CamelModel):
    message: str = Field(..., min_length=1, max_length=4000)
    # Entries are validated by the chat engine; malformed ones are dropped
    conversation_history: list[Any] | None = None
    context: dict[str, Any] | None = None


class Recommendation(CamelModel):
    path_slug: str
    path_title: str
    path_description: str
    languages: list[str]


class ChatResponse(CamelModel):
    response: str
    recommendation: Recommendation


class ChatStatusResponse(CamelModel):
    message: str
    status: str
    provider: str
    configured: bool
    timestamp: str


class DevSession(CamelModel):
    selected_language: str = Field(..., min_length=1)
    selected_level: Literal["beginner", "intermediate", "advanced"] = "beginner"
    current_concept: str | None = None
    session_start_time: datetime | None = None
    learning_style: Literal["visual", "hands-on", "theoretical"] = "hands-on"


class DevProgress(CamelModel):
    total_time_spent: int = Field(default=0, ge=0)
    completed_concepts: list[str] = Field(default_factory=list)
    exercises_completed: int = Field(default=0, ge=0)
    last_activity: datetime | None = None


class DevRequest(CamelModel):
    message: str = Field(..., min_length=1, max_length=4000)
    session: DevSession
    progress: DevProgress = Field(default_factory=DevProgress)


class DevMetadata(CamelModel):
    confidence: float
    suggestions: list[str]
    concept: str | None = None
    exercise: bool | None = None
    show_progress: bool | None = None
    next_concept: str | None = None
    concept_completed: bool | None = None
    exercise_completed: bool | None = None
    debug_suggestions: list[str] | None = None
    error_type: str | None = None


class DevPreferences(CamelModel):
    learning_style: str
    pace: str
    show_examples: bool
    show_exercises: bool


class DevContext(CamelModel):
    language: str
    level: str
    current_concept: str
    session_start_time: datetime
    total_time_spent: int
    completed_concepts: list[str]
    exercises_completed: int
    last_activity: datetime
    progress: int
    user_preferences: DevPreferences


class DevAnalysis(CamelModel):
    intent: str
    confidence: float
    suggested_action: str


class DevResponse(CamelModel):
    response: str
    metadata: DevMetadata
    context: DevContext | None
    analysis: DevAnalysis


# =============================================================================
# HINT SCHEMAS
# =============================================================================


class SmartHintResponse(CamelModel):
    id: str
    type: str
    priority: str
    message: str
    code_suggestion: str | None
    explanation: str | None
    related_concepts: list[str]


class HintsResponse(CamelModel):
    success: bool = True
    hints: list[SmartHintResponse]
    learning_path: list[str]
    recommendations: list[str]


class HintInteractionRequest(CamelModel):
    lesson_id: str = Field(..., min_length=1)
    hint_id: str = Field(..., min_length=1)
    action: str = Field(..., min_length=1)
    code: str | None = None


class HintInteractionResponse(CamelModel):
    success: bool = True
    message: str


# =============================================================================
# CODE SCHEMAS
# =============================================================================


class ExecuteCodeRequest(CamelModel):
    code: str = Field(..., min_length=1, max_length=50_000)
    language: str = Field(..., min_length=1)


class ErrorAnalysisResponse(CamelModel):
    type: str
    severity: str
    explanation: str
    suggestions: list[str]
    examples: list[str]
    related_concepts: list[str]
    learning_resources: list[str]


class ExecutionResponse(CamelModel):
    success: bool
    output: str
    error: str | None
    execution_time: int
    error_analysis: ErrorAnalysisResponse | None = None


class AnalyzeErrorRequest(CamelModel):
    error: str = Field(..., min_length=1, max_length=10_000)
    language: str = Field(..., min_length=1)
    code: str | None = Field(default=None, max_length=50_000)


class CommonMistakeResponse(CamelModel):
    type: str
    severity: str
    explanation: str
    suggestions: list[str]
    examples: list[str]
    related_concepts: list[str]


class AnalyzeErrorResponse(CamelModel):
    success: bool = True
    analysis: ErrorAnalysisResponse
    error_kind: str
    debug_suggestions: list[str]
    common_fixes: list[str]
    common_mistakes: list[CommonMistakeResponse]


class VerifyCodeRequest(CamelModel):
    lesson_id: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1, max_length=50_000)
    language: str = Field(..., min_length=1)


class CaseResultResponse(CamelModel):
    name: str
    description: str
    passed: bool
    error: str | None
    output: str | None
    expected_output: str | None


class VerifyCodeResponse(CamelModel):
    success: bool = True
    results: list[CaseResultResponse]
    passed: bool
    total_tests: int
    passed_tests: int


# =============================================================================
# CHALLENGE SCHEMAS
# =============================================================================


class ExamEnvelope(CamelModel):
    exam: ExamResponse


class FreestyleResponse(CamelModel):
    id: str
    level_id: str
    prompt: str


class FreestyleEnvelope(CamelModel):
    freestyle: FreestyleResponse


class TrophyResponse(CamelModel):
    id: int
    language_id: str
    exam_id: str | None
    title: str
    description: str
    earned_at: str


class TrophyListResponse(CamelModel):
    trophies: list[TrophyResponse]


class ExamCompletionResponse(CamelModel):
    success: bool = True
    exam: ExamResponse
    trophy: TrophyResponse
    newly_awarded: bool


# =============================================================================
# AUTOSAVE & STATS SCHEMAS
# =============================================================================


class AutosaveRequest(CamelModel):
    lesson_id: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1, max_length=50_000)
    language: str | None = None


class AutosaveResponse(CamelModel):
    success: bool = True
    saved_at: str


class SavedCodeResponse(CamelModel):
    saved_code: str | None
    language: str | None = None
    saved_at: str | None = None


class StatsResponse(CamelModel):
    languages: int
    unique_users: int
    projects_total: int
    projects_today: int


# =============================================================================
# ACHIEVEMENT SCHEMAS
# =============================================================================


class AchievementProgressResponse(CamelModel):
    current: int
    required: int
    percentage: int


class AchievementResponse(CamelModel):
    id: str
    title: str
    description: str
    icon: str
    category: str
    points: int
    rarity: str
    unlocked_at: str | None = None
    progress: AchievementProgressResponse | None = None


class AchievementsResponse(CamelModel):
    achievements: list[AchievementResponse]
    newly_unlocked: list[str]
    total_points: int
    level: str
    streak_days: int
