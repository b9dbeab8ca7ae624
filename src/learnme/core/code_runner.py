"""Mock code execution.

None of these runners executes learner code. Each one inspects the source
with regexes and substring checks and produces what a real run would
plausibly print, which is enough for the editor's "Run" button:

- javascript/js: console.* calls are collected
- python: print(...) calls are collected
- html: a sanitized preview is returned
- css: braces and dangerous constructs are checked
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import Callable

import structlog

from learnme.utils.text_utils import strip_quotes

logger = structlog.get_logger(__name__)


@dataclass
class ExecutionResult:
    """Outcome of a (simulated) run."""

    success: bool
    output: str
    error: str | None
    execution_time_ms: int

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "output": self.output,
            "error": self.error,
            "executionTime": self.execution_time_ms,
        }


class RestrictedCodeError(Exception):
    """Raised when code uses a construct the runners refuse to simulate."""

    pass


PRINT_CALL = re.compile(r"print\(([^)]+)\)")
CONSOLE_CALL = re.compile(r"console\.(log|info|warn|error)\(([^)]*)\)")

SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
JS_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)
INLINE_HANDLER = re.compile(r"on\w+\s*=", re.IGNORECASE)

JS_FORBIDDEN = ("eval(", "Function(", "require(", "process.")


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _split_args(args: str) -> list[str]:
    """Split call arguments at commas outside quotes and brackets."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None

    for char in args:
        if quote is not None:
            if char == quote:
                quote = None
        elif char in "'\"`":
            quote = char
        elif char in "[{":
            depth += 1
        elif char in "]}":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)

    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def _run_javascript(code: str) -> tuple[list[str], list[str]]:
    for construct in JS_FORBIDDEN:
        if construct in code:
            raise RestrictedCodeError(f"SecurityError: '{construct}' is not allowed")

    output: list[str] = []
    errors: list[str] = []
    for method, args in CONSOLE_CALL.findall(code):
        text = " ".join(strip_quotes(arg) for arg in _split_args(args))
        if method == "error":
            errors.append(text)
        elif method == "warn":
            output.append(f"WARN: {text}")
        elif method == "info":
            output.append(f"INFO: {text}")
        else:
            output.append(text)
    return output, errors


def _run_python(code: str) -> tuple[list[str], list[str]]:
    output = [strip_quotes(args) for args in PRINT_CALL.findall(code)]
    errors: list[str] = []

    if "import os" in code or "import sys" in code:
        errors.append("ImportError: Restricted imports not allowed")

    if "__import__" in code or "eval(" in code:
        errors.append("SecurityError: Dangerous operations not allowed")

    return output, errors


def _run_html(code: str) -> tuple[list[str], list[str]]:
    sanitized = SCRIPT_BLOCK.sub("<!-- Scripts disabled for security -->", code)
    sanitized = JS_PROTOCOL.sub("javascript-disabled:", sanitized)
    sanitized = INLINE_HANDLER.sub("data-disabled-", sanitized)
    return [sanitized], []


def _run_css(code: str) -> tuple[list[str], list[str]]:
    errors: list[str] = []

    if "expression(" in code or "url(" in code:
        errors.append("SecurityError: Dangerous CSS properties not allowed")

    if code.count("{") != code.count("}"):
        errors.append("SyntaxError: Mismatched braces")

    return [code], errors


RUNNERS: dict[str, Callable[[str], tuple[list[str], list[str]]]] = {
    "javascript": _run_javascript,
    "js": _run_javascript,
    "python": _run_python,
    "html": _run_html,
    "css": _run_css,
}


def supported_languages() -> list[str]:
    return sorted(RUNNERS)


def execute_code(code: str, language: str) -> ExecutionResult:
    """Simulate running code in the given language.

    Args:
        code: Source code
        language: Language name (case-insensitive)

    Returns:
        ExecutionResult. Never raises: runner failures are reported in
        `error` with success=False.
    """
    start = time.perf_counter()
    runner = RUNNERS.get(language.lower())

    if runner is None:
        return ExecutionResult(
            success=False,
            output="",
            error=f"Language '{language}' is not supported for real-time execution",
            execution_time_ms=_elapsed_ms(start),
        )

    try:
        output, errors = runner(code)
    except Exception as e:
        logger.warning("code_execution_failed", language=language, error=str(e))
        return ExecutionResult(
            success=False,
            output="",
            error=str(e) or "Unknown execution error",
            execution_time_ms=_elapsed_ms(start),
        )

    return ExecutionResult(
        success=not errors,
        output="\n".join(output),
        error="\n".join(errors) if errors else None,
        execution_time_ms=_elapsed_ms(start),
    )
