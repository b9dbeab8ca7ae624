"""Autosave, achievements and platform statistics endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status

from learnme.core.achievements import (
    ACHIEVEMENTS,
    get_achievement_progress,
    refresh_achievements,
)
from learnme.db.activity_repository import get_autosave, save_autosave
from learnme.db.catalog_repository import count_languages, get_lesson
from learnme.db.progress_repository import count_completed
from learnme.db.users_repository import UserRecord, count_users
from learnme.web.deps import require_user
from learnme.web.schemas import (
    AchievementProgressResponse,
    AchievementResponse,
    AchievementsResponse,
    AutosaveRequest,
    AutosaveResponse,
    SavedCodeResponse,
    StatsResponse,
)

router = APIRouter(tags=["activity"])


@router.get("/api/autosave", response_model=SavedCodeResponse)
async def read_autosave(
    lesson_id: str = Query(..., alias="lessonId", min_length=1),
    user: UserRecord = Depends(require_user),
) -> SavedCodeResponse:
    """Latest saved draft for a lesson, or savedCode=null."""
    draft = get_autosave(user.user_id, lesson_id)
    if draft is None:
        return SavedCodeResponse(saved_code=None)
    return SavedCodeResponse(
        saved_code=draft.code, language=draft.language, saved_at=draft.saved_at
    )


@router.post("/api/autosave", response_model=AutosaveResponse)
async def write_autosave(
    body: AutosaveRequest,
    user: UserRecord = Depends(require_user),
) -> AutosaveResponse:
    """Save a code draft, replacing the previous one for the lesson."""
    if get_lesson(body.lesson_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Lesson '{body.lesson_id}' not found",
        )

    draft = save_autosave(user.user_id, body.lesson_id, body.code, body.language)
    return AutosaveResponse(saved_at=draft.saved_at)


@router.get("/api/achievements", response_model=AchievementsResponse)
async def read_achievements(
    user: UserRecord = Depends(require_user),
) -> AchievementsResponse:
    """All achievements with unlock dates, unlocking any newly earned ones.

    Locked achievements carry the learner's progress toward them.
    """
    summary = refresh_achievements(user.user_id)

    achievements = []
    for achievement in ACHIEVEMENTS:
        unlocked_at = summary.unlocked.get(achievement.id)
        progress = None
        if unlocked_at is None:
            p = get_achievement_progress(achievement, summary.activity)
            progress = AchievementProgressResponse(
                current=p.current, required=p.required, percentage=p.percentage
            )
        achievements.append(
            AchievementResponse(
                id=achievement.id,
                title=achievement.title,
                description=achievement.description,
                icon=achievement.icon,
                category=achievement.category,
                points=achievement.points,
                rarity=achievement.rarity,
                unlocked_at=unlocked_at,
                progress=progress,
            )
        )

    return AchievementsResponse(
        achievements=achievements,
        newly_unlocked=summary.newly_unlocked,
        total_points=summary.total_points,
        level=summary.level,
        streak_days=summary.activity.streak_days,
    )


@router.get("/api/stats", response_model=StatsResponse)
async def get_stats() -> StatsResponse:
    """Platform counters."""
    # progress.updated_at is stored in UTC by SQLite's datetime('now')
    midnight = datetime.now(timezone.utc).strftime("%Y-%m-%d 00:00:00")
    return StatsResponse(
        languages=count_languages(),
        unique_users=count_users(),
        projects_total=count_completed(),
        projects_today=count_completed(since=midnight),
    )
