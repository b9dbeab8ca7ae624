"""Language and learning-path catalog endpoints."""

from fastapi import APIRouter, HTTPException, status

from learnme.db.catalog_repository import (
    LessonRecord,
    PathRecord,
    get_exam_for_lesson,
    get_language_by_slug,
    get_path,
    list_languages,
    list_lessons,
    list_levels,
    list_paths,
)
from learnme.web.schemas import (
    ExamResponse,
    LanguageDetailResponse,
    LanguageResponse,
    LessonSummary,
    LevelSummary,
    PathLanguage,
    PathListResponse,
    PathResponse,
)

router = APIRouter(tags=["catalog"])


def _lesson_summary(lesson: LessonRecord) -> LessonSummary:
    exam = get_exam_for_lesson(lesson.lesson_id)
    return LessonSummary(
        id=lesson.lesson_id,
        number=lesson.number,
        title=lesson.title,
        difficulty=lesson.difficulty,
        level_id=lesson.level_id,
        has_test_cases=bool(lesson.test_cases),
        exam=ExamResponse(id=exam.exam_id, lesson_id=exam.lesson_id, prompt=exam.prompt)
        if exam
        else None,
    )


def _path_response(path: PathRecord) -> PathResponse:
    languages = []
    for language_id in path.language_ids:
        language = get_language_by_slug(language_id)
        if language is None:
            continue
        languages.append(
            PathLanguage(
                slug=language.slug,
                name=language.name,
                lesson_ids=[l.lesson_id for l in list_lessons(language.language_id)],
            )
        )
    return PathResponse(
        slug=path.slug,
        title=path.title,
        description=path.description,
        languages=languages,
    )


@router.get("/api/languages", response_model=list[LanguageResponse])
async def get_languages() -> list[LanguageResponse]:
    """List languages by name, with their lessons in order."""
    return [
        LanguageResponse(
            id=language.language_id,
            slug=language.slug,
            name=language.name,
            lessons=[_lesson_summary(l) for l in list_lessons(language.language_id)],
        )
        for language in list_languages()
    ]


@router.get("/api/languages/{slug}", response_model=LanguageDetailResponse)
async def get_language(slug: str) -> LanguageDetailResponse:
    """Get one language with its levels and lessons."""
    language = get_language_by_slug(slug)
    if language is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Language '{slug}' not found",
        )

    lessons = list_lessons(language.language_id)
    levels = [
        LevelSummary(
            id=level.level_id,
            number=level.number,
            lessons=[_lesson_summary(l) for l in lessons if l.level_id == level.level_id],
        )
        for level in list_levels(language.language_id)
    ]

    return LanguageDetailResponse(
        id=language.language_id,
        slug=language.slug,
        name=language.name,
        levels=levels,
    )


@router.get("/api/paths", response_model=PathListResponse)
async def get_paths() -> PathListResponse:
    """List learning paths."""
    paths = [_path_response(p) for p in list_paths()]
    return PathListResponse(paths=paths, count=len(paths))


@router.get("/api/paths/{slug}", response_model=PathResponse)
async def get_path_detail(slug: str) -> PathResponse:
    """Get a learning path with its languages and their lesson IDs."""
    path = get_path(slug)
    if path is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Path not found",
        )
    return _path_response(path)
