"""Text processing utilities.

Common text manipulation functions used across modules.
"""

import re

# Patterns for removing thinking/reasoning blocks from LLM output
THINK_PATTERNS = [
    re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE),
    re.compile(r"<thinking>.*?</thinking>", re.DOTALL | re.IGNORECASE),
    re.compile(r"<analysis>.*?</analysis>", re.DOTALL | re.IGNORECASE),
    re.compile(r"<reasoning>.*?</reasoning>", re.DOTALL | re.IGNORECASE),
]

QUOTE_PATTERN = re.compile(r"""['"`]""")


def strip_think(text: str) -> str:
    """Remove thinking/reasoning tags from LLM output.

    Local OpenAI-compatible models sometimes emit <think>...</think> blocks
    ahead of the answer; those must not reach the learner or the path
    recommender.

    Args:
        text: Raw LLM output text

    Returns:
        Cleaned text without thinking artifacts
    """
    result = text
    for pattern in THINK_PATTERNS:
        result = pattern.sub("", result)
    return result.strip()


def strip_quotes(text: str) -> str:
    """Remove every single, double and backtick quote character."""
    return QUOTE_PATTERN.sub("", text)


def iso_date(timestamp: str | None) -> str:
    """Date part of an ISO or SQLite datetime string ("2025-01-02 10:00" -> "2025-01-02")."""
    if not timestamp:
        return ""
    return re.split(r"[T ]", timestamp, maxsplit=1)[0]
