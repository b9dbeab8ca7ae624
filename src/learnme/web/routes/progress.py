"""Lesson progress endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from learnme.db.catalog_repository import get_lesson
from learnme.db.progress_repository import get_progress, list_progress, mark_lesson_complete
from learnme.web.deps import progress_user_id
from learnme.web.schemas import (
    ProgressCreate,
    ProgressItem,
    ProgressListResponse,
    ProgressMarkResponse,
    ProgressStatus,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.get("", response_model=ProgressStatus | ProgressListResponse)
async def read_progress(
    lesson_id: str | None = Query(default=None, alias="lessonId"),
    user_id: str = Depends(progress_user_id),
) -> ProgressStatus | ProgressListResponse:
    """Progress for one lesson (with lessonId) or every lesson of the caller."""
    if lesson_id:
        progress = get_progress(user_id, lesson_id)
        return ProgressStatus(
            completed=progress.completed if progress else False,
            completed_at=progress.completed_at if progress else None,
        )

    return ProgressListResponse(
        progress=[
            ProgressItem(
                lesson_id=entry.progress.lesson_id,
                lesson_title=entry.lesson_title,
                lesson_number=entry.lesson_number,
                language_slug=entry.language_slug,
                language_name=entry.language_name,
                completed=entry.progress.completed,
                score=entry.progress.score,
                completed_at=entry.progress.completed_at,
            )
            for entry in list_progress(user_id)
        ]
    )


@router.post("", response_model=ProgressMarkResponse)
async def complete_lesson(
    body: ProgressCreate,
    user_id: str = Depends(progress_user_id),
) -> ProgressMarkResponse:
    """Mark a lesson complete. Repeating the call updates the same record."""
    if get_lesson(body.lesson_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Lesson '{body.lesson_id}' not found",
        )

    progress = mark_lesson_complete(user_id, body.lesson_id, score=body.score)
    logger.info("lesson_completed", user_id=user_id, lesson_id=body.lesson_id)

    return ProgressMarkResponse(
        progress=ProgressStatus(completed=progress.completed, completed_at=progress.completed_at)
    )
