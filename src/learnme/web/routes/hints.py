"""Smart hint endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from learnme.core.smart_hints import (
    HintContext,
    SmartHint,
    UnknownActionError,
    describe_action,
    generate_smart_hints,
    get_learning_path_suggestions,
    get_personalized_recommendations,
)
from learnme.db.activity_repository import list_seen_hints, record_hint_interaction
from learnme.db.progress_repository import ANONYMOUS_USER
from learnme.web.deps import optional_user_id
from learnme.web.schemas import (
    HintInteractionRequest,
    HintInteractionResponse,
    HintsResponse,
    SmartHintResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/smart-hints", tags=["hints"])


def _hint(hint: SmartHint) -> SmartHintResponse:
    return SmartHintResponse(
        id=hint.id,
        type=hint.type,
        priority=hint.priority,
        message=hint.message,
        code_suggestion=hint.code_suggestion,
        explanation=hint.explanation,
        related_concepts=list(hint.related_concepts),
    )


@router.get("", response_model=HintsResponse)
async def get_hints(
    lesson_id: str = Query(..., alias="lessonId", min_length=1),
    language: str = Query(..., min_length=1),
    code: str = Query(..., min_length=1),
    user_level: str = Query(default="beginner", alias="userLevel"),
    learning_progress: int = Query(default=50, alias="learningProgress", ge=0, le=100),
    user_id: str | None = Depends(optional_user_id),
) -> HintsResponse:
    """Hints for the learner's current code.

    Hints the caller already dismissed or applied in this lesson are skipped.
    """
    if user_level not in ("beginner", "intermediate", "advanced"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown user level '{user_level}'",
        )

    previous = list_seen_hints(user_id, lesson_id) if user_id else []
    context = HintContext(
        language=language,
        code=code,
        lesson_id=lesson_id,
        user_level=user_level,  # type: ignore[arg-type]
        previous_hints=previous,
        learning_progress=learning_progress,
    )

    return HintsResponse(
        hints=[_hint(h) for h in generate_smart_hints(context)],
        learning_path=get_learning_path_suggestions(language, []),
        recommendations=get_personalized_recommendations(learning_progress, []),
    )


@router.post("", response_model=HintInteractionResponse)
async def track_interaction(
    body: HintInteractionRequest,
    user_id: str | None = Depends(optional_user_id),
) -> HintInteractionResponse:
    """Record what the learner did with a hint."""
    try:
        description = describe_action(body.action)
    except UnknownActionError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    actor = user_id or ANONYMOUS_USER
    record_hint_interaction(actor, body.lesson_id, body.hint_id, body.action)
    logger.info(
        "hint_interaction",
        user_id=actor,
        lesson_id=body.lesson_id,
        hint_id=body.hint_id,
        action=description,
    )

    return HintInteractionResponse(message=f"Hint interaction tracked: {body.action}")
