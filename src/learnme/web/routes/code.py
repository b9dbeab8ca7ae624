"""Code execution and verification endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, status

from learnme.core.code_runner import execute_code
from learnme.core.code_verifier import verify_code
from learnme.core.error_analysis import (
    analyze_code_errors,
    analyze_error,
    get_common_mistakes,
    get_learning_resources,
)
from learnme.db.catalog_repository import get_lesson
from learnme.web.schemas import (
    AnalyzeErrorRequest,
    AnalyzeErrorResponse,
    CaseResultResponse,
    CommonMistakeResponse,
    ErrorAnalysisResponse,
    ExecuteCodeRequest,
    ExecutionResponse,
    VerifyCodeRequest,
    VerifyCodeResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["code"])


def _explain(error: str, language: str) -> ErrorAnalysisResponse:
    analysis = analyze_error(error, language)
    return ErrorAnalysisResponse(
        **analysis.to_dict(),
        learning_resources=get_learning_resources(analysis.type),
    )


@router.post("/api/execute-code", response_model=ExecutionResponse)
async def run_code(body: ExecuteCodeRequest) -> ExecutionResponse:
    """Simulate running the learner's code.

    Failed runs carry an explanation of the error.
    """
    result = execute_code(body.code, body.language)
    return ExecutionResponse(
        success=result.success,
        output=result.output,
        error=result.error,
        execution_time=result.execution_time_ms,
        error_analysis=_explain(result.error, body.language) if result.error else None,
    )


@router.post("/api/analyze-error", response_model=AnalyzeErrorResponse)
async def explain_error(body: AnalyzeErrorRequest) -> AnalyzeErrorResponse:
    """Explain an error message with fixes and common mistakes for the language."""
    report = analyze_code_errors(body.code or "", body.language, body.error)
    return AnalyzeErrorResponse(
        analysis=_explain(body.error, body.language),
        error_kind=report.type,
        debug_suggestions=report.suggestions,
        common_fixes=report.common_fixes,
        common_mistakes=[
            CommonMistakeResponse(**mistake.to_dict())
            for mistake in get_common_mistakes(body.language)
        ],
    )


@router.post("/api/verify-code", response_model=VerifyCodeResponse)
async def check_code(body: VerifyCodeRequest) -> VerifyCodeResponse:
    """Check the learner's code against the lesson's test cases."""
    lesson = get_lesson(body.lesson_id)
    if lesson is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lesson not found",
        )

    if not lesson.test_cases:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No test cases available for this lesson",
        )

    report = verify_code(body.code, lesson.test_cases, body.language)
    logger.info(
        "code_checked",
        lesson_id=body.lesson_id,
        passed=report.passed_tests,
        total=report.total_tests,
    )

    return VerifyCodeResponse(
        results=[
            CaseResultResponse(
                name=r.name,
                description=r.description,
                passed=r.passed,
                error=r.error,
                output=r.output,
                expected_output=r.expected_output,
            )
            for r in report.results
        ],
        passed=report.passed,
        total_tests=report.total_tests,
        passed_tests=report.passed_tests,
    )
