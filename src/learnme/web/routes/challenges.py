"""Exam, freestyle and trophy endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from learnme.core.challenges import (
    ChallengeNotFoundError,
    complete_exam,
    get_or_create_exam,
    get_or_create_freestyle,
)
from learnme.db.activity_repository import TrophyRecord, list_trophies
from learnme.db.catalog_repository import ExamRecord
from learnme.db.users_repository import UserRecord
from learnme.web.deps import require_user
from learnme.web.schemas import (
    ExamCompletionResponse,
    ExamEnvelope,
    ExamResponse,
    FreestyleEnvelope,
    FreestyleResponse,
    TrophyListResponse,
    TrophyResponse,
)

router = APIRouter(tags=["challenges"])


def _exam(exam: ExamRecord) -> ExamResponse:
    return ExamResponse(id=exam.exam_id, lesson_id=exam.lesson_id, prompt=exam.prompt)


def _trophy(trophy: TrophyRecord) -> TrophyResponse:
    return TrophyResponse(
        id=trophy.trophy_id,
        language_id=trophy.language_id,
        exam_id=trophy.exam_id,
        title=trophy.title,
        description=trophy.description,
        earned_at=trophy.earned_at,
    )


def _not_found(e: ChallengeNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/api/exams/{lesson_id}", response_model=ExamEnvelope)
async def get_exam(lesson_id: str) -> ExamEnvelope:
    """Get a lesson's exam, creating its prompt on first access."""
    try:
        exam = get_or_create_exam(lesson_id)
    except ChallengeNotFoundError as e:
        raise _not_found(e)
    return ExamEnvelope(exam=_exam(exam))


@router.post("/api/exams/{lesson_id}/complete", response_model=ExamCompletionResponse)
async def finish_exam(
    lesson_id: str,
    user: UserRecord = Depends(require_user),
) -> ExamCompletionResponse:
    """Record a passed exam and award the language trophy."""
    try:
        completion = complete_exam(user.user_id, lesson_id)
    except ChallengeNotFoundError as e:
        raise _not_found(e)

    return ExamCompletionResponse(
        exam=_exam(completion.exam),
        trophy=_trophy(completion.trophy),
        newly_awarded=completion.newly_awarded,
    )


@router.get("/api/freestyle/{level_id}", response_model=FreestyleEnvelope)
async def get_freestyle(level_id: str) -> FreestyleEnvelope:
    """Get a level's freestyle project, creating its prompt on first access."""
    try:
        freestyle = get_or_create_freestyle(level_id)
    except ChallengeNotFoundError as e:
        raise _not_found(e)
    return FreestyleEnvelope(
        freestyle=FreestyleResponse(
            id=freestyle.freestyle_id,
            level_id=freestyle.level_id,
            prompt=freestyle.prompt,
        )
    )


@router.get("/api/trophies", response_model=TrophyListResponse)
async def get_trophies(user: UserRecord = Depends(require_user)) -> TrophyListResponse:
    """List the caller's trophies, newest first."""
    return TrophyListResponse(trophies=[_trophy(t) for t in list_trophies(user.user_id)])
