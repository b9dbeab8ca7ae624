"""Dev tutoring endpoint.

One exchange of a tutoring session: the client sends the session and
progress it keeps, gets back the tutor's answer, what the message was
understood as, and the updated session context.
"""

from dataclasses import replace
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from learnme.core.dev_chat import ChatUnavailableError, DevChat
from learnme.core.error_analysis import analyze_code_errors
from learnme.core.teaching import (
    DEFAULT_CONCEPT,
    LearnerPreferences,
    TeachingContext,
    analyze_user_response,
    calculate_progress,
    choose_response_mode,
    extract_suggestions,
    generate_teaching_prompt,
    get_next_concept,
    response_confidence,
    should_generate_exercise,
    update_teaching_context,
)
from learnme.llm.client import LLMError
from learnme.web.routes.chat import get_dev_chat
from learnme.web.schemas import (
    DevAnalysis,
    DevContext,
    DevMetadata,
    DevPreferences,
    DevRequest,
    DevResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/dev", tags=["chat"])

TROUBLE_MESSAGE = (
    "I'm having trouble processing your request right now. Please try again in a "
    "moment, or rephrase your question. I'm here to help you learn programming! 💪"
)

TROUBLE_SUGGESTIONS = [
    "Try rephrasing your question",
    "Check your internet connection",
    "Ask me about a specific programming concept",
]

CONCEPT_DONE_WORDS = ("complete", "done", "finished")
EXERCISE_DONE_PHRASES = ("exercise complete", "practice done")
TROUBLE_WORDS = ("error", "bug", "not working")


def _utc(value: datetime | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _trouble() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "response": TROUBLE_MESSAGE,
            "metadata": {"confidence": 0.1, "suggestions": TROUBLE_SUGGESTIONS},
            "context": None,
            "analysis": {
                "intent": "general",
                "confidence": 0.1,
                "suggestedAction": "Provide general guidance",
            },
        },
    )


def _context_response(context: TeachingContext) -> DevContext:
    prefs = context.preferences
    return DevContext(
        language=context.language,
        level=context.level,
        current_concept=context.current_concept,
        session_start_time=context.session_start_time,
        total_time_spent=context.total_time_spent,
        completed_concepts=context.completed_concepts,
        exercises_completed=context.exercises_completed,
        last_activity=context.last_activity,
        progress=calculate_progress(context),
        user_preferences=DevPreferences(
            learning_style=prefs.learning_style,
            pace=prefs.pace,
            show_examples=prefs.show_examples,
            show_exercises=prefs.show_exercises,
        ),
    )


@router.post("", response_model=DevResponse, response_model_exclude_none=True)
async def teach(body: DevRequest, dev: DevChat = Depends(get_dev_chat)):
    """Answer a learner inside a tutoring session."""
    session, progress = body.session, body.progress
    context = TeachingContext(
        language=session.selected_language,
        level=session.selected_level,
        current_concept=session.current_concept or DEFAULT_CONCEPT,
        session_start_time=_utc(session.session_start_time),
        total_time_spent=progress.total_time_spent,
        completed_concepts=list(progress.completed_concepts),
        exercises_completed=progress.exercises_completed,
        last_activity=_utc(progress.last_activity),
        preferences=LearnerPreferences(learning_style=session.learning_style),
    )

    analysis = analyze_user_response(body.message)
    mode = choose_response_mode(analysis, should_generate_exercise(context))
    prompt = generate_teaching_prompt(context, body.message, mode)

    try:
        answer = await run_in_threadpool(dev.teach, prompt.system_prompt, prompt.user_prompt)
    except ChatUnavailableError as e:
        logger.error("teach_unavailable", error=str(e))
        return _trouble()
    except LLMError as e:
        logger.error("teach_failed", error=str(e))
        return _trouble()

    updated = update_teaching_context(context, answer)
    metadata = DevMetadata(
        confidence=response_confidence(answer, context.language, session.learning_style),
        suggestions=extract_suggestions(answer),
    )
    if mode == "explanation":
        metadata.concept = context.current_concept
    elif mode == "exercise":
        metadata.exercise = True

    if analysis.intent == "progress" and analysis.confidence > 0.8:
        metadata.show_progress = True

    lowered = body.message.lower()
    if any(word in lowered for word in CONCEPT_DONE_WORDS):
        completed = list(updated.completed_concepts)
        if context.current_concept not in completed:
            completed.append(context.current_concept)
        updated = replace(updated, completed_concepts=completed)
        next_concept = get_next_concept(updated)
        if next_concept is not None:
            metadata.next_concept = next_concept
            metadata.concept_completed = True

    if any(phrase in lowered for phrase in EXERCISE_DONE_PHRASES):
        updated = replace(updated, exercises_completed=updated.exercises_completed + 1)
        metadata.exercise_completed = True

    if any(word in lowered for word in TROUBLE_WORDS):
        report = analyze_code_errors(body.message, context.language, body.message)
        metadata.debug_suggestions = report.suggestions
        metadata.error_type = report.type

    logger.info("teach_reply", intent=analysis.intent, mode=mode, language=context.language)

    return DevResponse(
        response=answer,
        metadata=metadata,
        context=_context_response(updated),
        analysis=DevAnalysis(
            intent=analysis.intent,
            confidence=analysis.confidence,
            suggested_action=analysis.suggested_action,
        ),
    )
