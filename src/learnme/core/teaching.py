"""Tutoring session logic for the Dev teaching endpoint.

Classifies what the learner is asking for, decides whether the answer
should be an explanation, an exercise, feedback or general guidance, and
builds the prompts for it. Also scores the tutor's answer and pulls short
suggestions out of it.

Intent matching is case-insensitive substring containment over an ordered
rule table; the first rule with a hit wins, so "explain this exercise" is a
learn request.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Callable, Literal

from learnme.prompts.registry import get_prompt

Intent = Literal["learn", "practice", "help", "progress", "general"]
ResponseMode = Literal["explanation", "exercise", "feedback", "guidance"]
LearningStyle = Literal["visual", "hands-on", "theoretical"]

DEFAULT_CONCEPT = "variables-and-data-types"

# Concepts offered in order once the current one is done
CONCEPT_SEQUENCE = ("variables-and-data-types", "functions-basics", "conditionals", "loops")

# Concepts per language and level used for the progress percentage
TOTAL_CONCEPTS = 10

EXERCISE_FREQUENCY = 0.3
MAX_MINUTES_PER_INTERACTION = 5
MAX_SUGGESTIONS = 3

_BULLET = re.compile(r"^[•\-*]\s*")


@dataclass
class LearnerPreferences:
    learning_style: LearningStyle = "hands-on"
    pace: str = "normal"
    show_examples: bool = True
    show_exercises: bool = True


@dataclass
class TeachingContext:
    """Where a learner stands in a tutoring session.

    total_time_spent is in minutes.
    """

    language: str
    level: str
    current_concept: str = DEFAULT_CONCEPT
    session_start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    total_time_spent: int = 0
    completed_concepts: list[str] = field(default_factory=list)
    exercises_completed: int = 0
    last_activity: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    preferences: LearnerPreferences = field(default_factory=LearnerPreferences)


@dataclass(frozen=True)
class IntentRule:
    intent: Intent
    keywords: tuple[str, ...]
    confidence: float
    suggested_action: str


@dataclass
class IntentAnalysis:
    intent: Intent
    confidence: float
    suggested_action: str


@dataclass
class TeachingPrompt:
    system_prompt: str
    user_prompt: str


# Ordered: first match wins
INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        intent="learn",
        keywords=("explain", "what is", "how does", "teach me"),
        confidence=0.9,
        suggested_action="Provide detailed explanation with examples",
    ),
    IntentRule(
        intent="practice",
        keywords=("exercise", "practice", "challenge", "try"),
        confidence=0.85,
        suggested_action="Generate interactive coding exercise",
    ),
    IntentRule(
        intent="help",
        keywords=("help", "stuck", "confused", "don't understand"),
        confidence=0.8,
        suggested_action="Provide clarification and additional examples",
    ),
    IntentRule(
        intent="progress",
        keywords=("progress", "how am i doing", "status", "completed"),
        confidence=0.9,
        suggested_action="Show learning progress and next steps",
    ),
)

GENERAL_INTENT = IntentAnalysis(
    intent="general",
    confidence=0.5,
    suggested_action="Provide general guidance and encouragement",
)


def analyze_user_response(message: str) -> IntentAnalysis:
    """Classify a learner message as learn, practice, help, progress or general."""
    lowered = message.lower()
    for rule in INTENT_RULES:
        if any(keyword in lowered for keyword in rule.keywords):
            return IntentAnalysis(
                intent=rule.intent,
                confidence=rule.confidence,
                suggested_action=rule.suggested_action,
            )
    return replace(GENERAL_INTENT)


def should_generate_exercise(
    context: TeachingContext, roll: Callable[[], float] | None = None
) -> bool:
    """Whether the next answer should be a coding exercise.

    Always for hands-on learners and for learners with fewer exercises than
    half their completed concepts; otherwise with EXERCISE_FREQUENCY odds.
    """
    if context.preferences.learning_style == "hands-on":
        return True
    if context.exercises_completed < len(context.completed_concepts) * 0.5:
        return True
    if roll is None:
        roll = random.random
    return roll() < EXERCISE_FREQUENCY


def choose_response_mode(analysis: IntentAnalysis, exercise: bool) -> ResponseMode:
    if analysis.intent == "learn":
        return "explanation"
    if analysis.intent == "practice" or exercise:
        return "exercise"
    if analysis.intent == "help":
        return "feedback"
    return "guidance"


def update_teaching_context(
    context: TeachingContext, ai_response: str, now: datetime | None = None
) -> TeachingContext:
    """Account for one exchange: time spent (capped per exchange) and shown material."""
    if now is None:
        now = datetime.now(timezone.utc)

    elapsed = int((now - context.last_activity).total_seconds() // 60)
    minutes = max(0, min(elapsed, MAX_MINUTES_PER_INTERACTION))

    prefs = context.preferences
    return replace(
        context,
        last_activity=now,
        total_time_spent=context.total_time_spent + minutes,
        preferences=replace(
            prefs,
            show_examples=prefs.show_examples or "example" in ai_response,
            show_exercises=prefs.show_exercises or "exercise" in ai_response,
        ),
    )


def get_next_concept(context: TeachingContext) -> str | None:
    """First concept in CONCEPT_SEQUENCE not completed yet, or None."""
    for concept in CONCEPT_SEQUENCE:
        if concept not in context.completed_concepts:
            return concept
    return None


def calculate_progress(context: TeachingContext) -> int:
    return int(len(context.completed_concepts) / TOTAL_CONCEPTS * 100 + 0.5)


def generate_teaching_prompt(
    context: TeachingContext, message: str, mode: ResponseMode
) -> TeachingPrompt:
    """Build the system and user prompts for a response mode.

    Guidance uses the tutor persona alone and passes the message through.
    """
    system_prompt = get_prompt("teaching/system").strip()
    if mode == "guidance":
        return TeachingPrompt(system_prompt=system_prompt, user_prompt=message)

    prefs = context.preferences
    variables = {
        "language": context.language,
        "level": context.level,
        "concept": context.current_concept,
        "learning_style": prefs.learning_style,
        "pace": prefs.pace,
        "examples": "examples" if prefs.show_examples else "minimal examples",
    }
    addition = get_prompt(f"teaching/{mode}_system", **variables).strip()
    # The message goes in last so placeholders typed by the learner stay literal
    user_prompt = get_prompt(f"teaching/{mode}_user", **variables)
    user_prompt = user_prompt.replace("{message}", message).strip()

    return TeachingPrompt(
        system_prompt=f"{system_prompt}\n\n{addition}",
        user_prompt=user_prompt,
    )


def response_confidence(response: str, language: str, learning_style: str) -> float:
    """Heuristic quality score in [0.5, 1.0] for a tutor answer."""
    confidence = 0.5
    if len(response) > 200:
        confidence += 0.2
    if len(response) > 500:
        confidence += 0.1
    if "```" in response or "code" in response:
        confidence += 0.15
    if language.lower() in response.lower():
        confidence += 0.1
    if learning_style == "hands-on" and "practice" in response:
        confidence += 0.1
    if learning_style == "visual" and "example" in response:
        confidence += 0.1
    return round(min(confidence, 1.0), 2)


def extract_suggestions(response: str) -> list[str]:
    """Bullet-ish lines of a tutor answer, at most MAX_SUGGESTIONS."""
    suggestions = []
    for line in response.split("\n"):
        if not any(mark in line for mark in ("•", "-", "*")):
            continue
        suggestion = _BULLET.sub("", line).strip()
        if len(suggestion) > 10:
            suggestions.append(suggestion)
    return suggestions[:MAX_SUGGESTIONS]
