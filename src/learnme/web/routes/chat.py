"""Dev assistant chat endpoint."""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from learnme.core.dev_chat import FALLBACK_MESSAGE, ChatUnavailableError, DevChat
from learnme.llm.client import LLMError
from learnme.web.schemas import ChatRequest, ChatResponse, ChatStatusResponse, Recommendation

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/ai-chat", tags=["chat"])


def get_dev_chat() -> DevChat:
    """Chat engine dependency."""
    return DevChat()


def _failure(detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail, "fallback": FALLBACK_MESSAGE},
    )


@router.get("", response_model=ChatStatusResponse)
async def chat_status(dev: DevChat = Depends(get_dev_chat)) -> ChatStatusResponse:
    """Report whether the chat is ready to take messages."""
    return ChatStatusResponse(
        message="AI Chat API is working! Use POST method to send messages.",
        status="ready",
        provider=dev.config.provider,
        configured=dev.is_configured(),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.post("", response_model=ChatResponse)
async def chat(body: ChatRequest, dev: DevChat = Depends(get_dev_chat)):
    """Send a message to Dev and get a reply plus a recommended path."""
    try:
        reply = await run_in_threadpool(dev.reply, body.message, body.conversation_history)
    except ChatUnavailableError as e:
        logger.error("chat_unavailable", error=str(e))
        return _failure(str(e))
    except LLMError as e:
        logger.error("chat_failed", error=str(e))
        return _failure("Failed to generate AI response")

    rec = reply.recommendation
    return ChatResponse(
        response=reply.response,
        recommendation=Recommendation(
            path_slug=rec.path_slug,
            path_title=rec.path_title,
            path_description=rec.path_description,
            languages=rec.languages,
        ),
    )
