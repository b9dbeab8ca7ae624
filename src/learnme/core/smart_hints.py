"""Smart hints engine.

Scans submitted code for trigger substrings from a static per-language table
and returns canned advice, re-prioritized for the learner's level and
progress.

Public functions:
- generate_smart_hints(context) -> list[SmartHint]
- get_contextual_hints(code, language) -> list[SmartHint]
- get_learning_path_suggestions(language, current_concepts) -> list[str]
- get_personalized_recommendations(learning_progress, common_mistakes) -> list[str]
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Literal

import structlog

logger = structlog.get_logger(__name__)

HintType = Literal["syntax", "logic", "best_practice", "concept", "debugging"]
Priority = Literal["low", "medium", "high"]
UserLevel = Literal["beginner", "intermediate", "advanced"]

PRIORITY_ORDER: dict[str, int] = {"high": 3, "medium": 2, "low": 1}
MAX_HINTS = 3

HINT_ACTIONS: dict[str, str] = {
    "dismiss": "Hint dismissed",
    "apply": "Hint applied to code",
    "ignore": "Hint ignored",
    "helpful": "Hint marked as helpful",
    "not_helpful": "Hint marked as not helpful",
}


class UnknownActionError(ValueError):
    """Raised for a hint interaction action that isn't recognized."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(
            f"Unknown hint action '{action}'. Expected one of: {', '.join(HINT_ACTIONS)}"
        )


@dataclass(frozen=True)
class SmartHint:
    """A canned piece of advice and the code patterns that trigger it."""

    id: str
    type: HintType
    priority: Priority
    message: str
    related_concepts: tuple[str, ...]
    triggers: tuple[str, ...]
    code_suggestion: str | None = None
    explanation: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "priority": self.priority,
            "message": self.message,
            "codeSuggestion": self.code_suggestion,
            "explanation": self.explanation,
            "relatedConcepts": list(self.related_concepts),
            "triggers": list(self.triggers),
        }


@dataclass
class HintContext:
    """What the engine knows about the learner and their code."""

    language: str
    code: str
    lesson_id: str = ""
    user_level: UserLevel = "beginner"
    previous_hints: list[str] = field(default_factory=list)
    common_mistakes: list[str] = field(default_factory=list)
    learning_progress: int = 50  # 0-100


# =============================================================================
# HINTS TABLE
# =============================================================================

SMART_HINTS: dict[str, tuple[SmartHint, ...]] = {
    "javascript": (
        SmartHint(
            id="js-var-declaration",
            type="syntax",
            priority="medium",
            message="Consider using `let` or `const` instead of `var` for better scoping",
            code_suggestion="let variableName = value;",
            explanation="`let` and `const` have block scope, while `var` has function scope. This prevents unexpected behavior.",
            related_concepts=("Variable Declaration", "Scope", "ES6"),
            triggers=("var ", "var\t", "var\n"),
        ),
        SmartHint(
            id="js-strict-equality",
            type="best_practice",
            priority="high",
            message="Use `===` for strict equality comparison instead of `==`",
            code_suggestion='if (value === "test") { }',
            explanation="`===` checks both value and type, while `==` performs type coercion which can lead to unexpected results.",
            related_concepts=("Equality Operators", "Type Coercion", "Comparison"),
            triggers=(" == ", " ==\n", " ==\t", "==", "!=="),
        ),
        SmartHint(
            id="js-template-literals",
            type="best_practice",
            priority="medium",
            message="Consider using template literals for string concatenation",
            code_suggestion="const message = `Hello, ${name}!`;",
            explanation="Template literals are more readable and efficient than string concatenation with `+`.",
            related_concepts=("Template Literals", "String Interpolation", "ES6"),
            triggers=('" + ', ' + "', " + ", " + \n", " + \t"),
        ),
        SmartHint(
            id="js-arrow-functions",
            type="best_practice",
            priority="medium",
            message="Consider using arrow functions for concise syntax",
            code_suggestion="const add = (a, b) => a + b;",
            explanation="Arrow functions provide shorter syntax and lexical `this` binding.",
            related_concepts=("Arrow Functions", "ES6", "Function Syntax"),
            triggers=("function(", "function (", "function\t("),
        ),
        SmartHint(
            id="js-array-methods",
            type="concept",
            priority="medium",
            message="Consider using array methods like `map`, `filter`, or `reduce` instead of loops",
            code_suggestion="const doubled = numbers.map(n => n * 2);",
            explanation="Array methods are more functional and often more readable than traditional loops.",
            related_concepts=("Array Methods", "Functional Programming", "ES6"),
            triggers=("for (", "for(", "for\t(", "while (", "while("),
        ),
        SmartHint(
            id="js-destructuring",
            type="best_practice",
            priority="low",
            message="Consider using destructuring for cleaner object/array access",
            code_suggestion="const { name, age } = person;",
            explanation="Destructuring makes code more readable and reduces repetition.",
            related_concepts=("Destructuring", "ES6", "Object Access"),
            triggers=("object.", "array[", "person.name", "person.age"),
        ),
    ),
    "python": (
        SmartHint(
            id="py-f-string",
            type="best_practice",
            priority="high",
            message="Use f-strings for string formatting instead of `.format()` or `%`",
            code_suggestion='message = f"Hello, {name}!"',
            explanation="F-strings are more readable and efficient than other string formatting methods.",
            related_concepts=("F-strings", "String Formatting", "Python 3.6+"),
            triggers=(".format(", " % ", " %s", " %d"),
        ),
        SmartHint(
            id="py-list-comprehension",
            type="concept",
            priority="medium",
            message="Consider using list comprehension for creating lists",
            code_suggestion="squares = [x**2 for x in numbers]",
            explanation="List comprehensions are more Pythonic and often more efficient than loops.",
            related_concepts=("List Comprehension", "Pythonic Code", "Functional Programming"),
            triggers=("for ", "for\t", "for\n", "append("),
        ),
        SmartHint(
            id="py-default-args",
            type="best_practice",
            priority="high",
            message="Use `None` as default argument instead of mutable objects",
            code_suggestion="def add_item(item, items=None):\n    if items is None:\n        items = []",
            explanation="Mutable default arguments are created once and shared between function calls.",
            related_concepts=("Default Arguments", "Mutable vs Immutable", "Function Parameters"),
            triggers=("def ", "def\t", "def\n", "=[]", "={}", "=set()"),
        ),
        SmartHint(
            id="py-context-manager",
            type="best_practice",
            priority="medium",
            message="Use context managers (`with` statement) for file operations",
            code_suggestion='with open("file.txt", "r") as f:\n    content = f.read()',
            explanation="Context managers automatically handle resource cleanup and are more Pythonic.",
            related_concepts=("Context Managers", "File Operations", "Resource Management"),
            triggers=("open(", "file(", ".close()", ".read()", ".write()"),
        ),
        SmartHint(
            id="py-enumerate",
            type="concept",
            priority="medium",
            message="Use `enumerate()` when you need both index and value",
            code_suggestion='for i, item in enumerate(items):\n    print(f"{i}: {item}")',
            explanation="`enumerate()` is cleaner than using `range(len())` for indexed iteration.",
            related_concepts=("Enumerate", "Iteration", "Indexing"),
            triggers=("range(len(", "for i in range("),
        ),
    ),
    "css": (
        SmartHint(
            id="css-flexbox",
            type="concept",
            priority="medium",
            message="Consider using Flexbox for layout instead of floats",
            code_suggestion="display: flex;\njustify-content: center;\nalign-items: center;",
            explanation="Flexbox provides more powerful and predictable layout control than floats.",
            related_concepts=("Flexbox", "CSS Layout", "Modern CSS"),
            triggers=("float:", "float: ", "float: left", "float: right", "clear:"),
        ),
        SmartHint(
            id="css-grid",
            type="concept",
            priority="low",
            message="Consider using CSS Grid for complex layouts",
            code_suggestion="display: grid;\ngrid-template-columns: repeat(auto-fit, minmax(200px, 1fr));",
            explanation="CSS Grid is perfect for two-dimensional layouts and responsive design.",
            related_concepts=("CSS Grid", "Layout", "Responsive Design"),
            triggers=("display: flex", "flex-direction:", "flex-wrap:", "justify-content:"),
        ),
        SmartHint(
            id="css-custom-properties",
            type="best_practice",
            priority="medium",
            message="Use CSS custom properties (variables) for consistent theming",
            code_suggestion=":root {\n  --primary-color: #007bff;\n}\n.button {\n  background-color: var(--primary-color);\n}",
            explanation="CSS custom properties make it easier to maintain consistent colors and values.",
            related_concepts=("CSS Variables", "Custom Properties", "Theming"),
            triggers=("#", "rgb(", "rgba(", "color:", "background-color:"),
        ),
        SmartHint(
            id="css-mobile-first",
            type="best_practice",
            priority="high",
            message="Write mobile-first CSS with progressive enhancement",
            code_suggestion="/* Mobile styles */\n.container {\n  padding: 1rem;\n}\n\n/* Desktop styles */\n@media (min-width: 768px) {\n  .container {\n    padding: 2rem;\n  }\n}",
            explanation="Mobile-first approach ensures better performance and user experience across devices.",
            related_concepts=("Responsive Design", "Mobile-First", "Media Queries"),
            triggers=("@media", "min-width:", "max-width:", "width:", "height:"),
        ),
    ),
    "html": (
        SmartHint(
            id="html-semantic",
            type="best_practice",
            priority="high",
            message="Use semantic HTML elements for better accessibility and SEO",
            code_suggestion="<header>, <nav>, <main>, <section>, <article>, <footer>",
            explanation="Semantic elements provide meaning to screen readers and search engines.",
            related_concepts=("Semantic HTML", "Accessibility", "SEO"),
            triggers=("<div", "<span", "<p", "<h1", "<h2", "<h3"),
        ),
        SmartHint(
            id="html-forms",
            type="best_practice",
            priority="medium",
            message="Always include proper form labels and validation attributes",
            code_suggestion='<label for="email">Email:</label>\n<input type="email" id="email" required>',
            explanation="Proper labels and validation improve accessibility and user experience.",
            related_concepts=("Forms", "Accessibility", "Validation"),
            triggers=("<input", "<textarea", "<select", "<form"),
        ),
        SmartHint(
            id="html-meta",
            type="best_practice",
            priority="medium",
            message="Include essential meta tags for SEO and mobile optimization",
            code_suggestion='<meta name="viewport" content="width=device-width, initial-scale=1.0">\n<meta name="description" content="Page description">',
            explanation="Meta tags help with SEO, social sharing, and mobile responsiveness.",
            related_concepts=("Meta Tags", "SEO", "Mobile Optimization"),
            triggers=("<head", "<title", "<meta"),
        ),
    ),
}

CONCEPT_PATHS: dict[str, tuple[str, ...]] = {
    "javascript": (
        "Variables and Data Types",
        "Functions and Scope",
        "Arrays and Objects",
        "DOM Manipulation",
        "Async Programming",
        "ES6+ Features",
        "Error Handling",
        "Testing and Debugging",
    ),
    "python": (
        "Variables and Data Types",
        "Control Flow",
        "Functions and Modules",
        "Data Structures",
        "Object-Oriented Programming",
        "File Handling",
        "Error Handling",
        "Testing and Libraries",
    ),
    "css": (
        "Selectors and Properties",
        "Box Model and Layout",
        "Flexbox",
        "CSS Grid",
        "Responsive Design",
        "CSS Variables",
        "Animations and Transitions",
        "CSS Architecture",
    ),
    "html": (
        "Basic Structure",
        "Semantic Elements",
        "Forms and Inputs",
        "Accessibility",
        "SEO Best Practices",
        "Meta Tags",
        "Multimedia",
        "Advanced Features",
    ),
}


# =============================================================================
# ENGINE
# =============================================================================


def _adjust_priority(hint: SmartHint, user_level: str, learning_progress: int) -> Priority:
    """Re-prioritize a hint for the learner.

    Both rules look at the hint's original priority; the progress rule is
    applied last and wins when both fire.
    """
    adjusted = hint.priority

    if user_level == "beginner" and hint.priority == "low":
        adjusted = "medium"
    elif user_level == "advanced" and hint.priority == "high":
        adjusted = "medium"

    if learning_progress < 30 and hint.priority == "low":
        adjusted = "medium"
    elif learning_progress > 70 and hint.priority == "high":
        adjusted = "medium"

    return adjusted


def generate_smart_hints(context: HintContext) -> list[SmartHint]:
    """Analyze code and return the most relevant hints.

    Args:
        context: Learner and code context

    Returns:
        At most three hints, highest priority first. Hints with equal
        priority keep their table order.
    """
    language_hints = SMART_HINTS.get(context.language.lower(), ())
    code = context.code.lower()
    relevant: list[SmartHint] = []

    for hint in language_hints:
        if hint.id in context.previous_hints:
            continue

        if not any(trigger.lower() in code for trigger in hint.triggers):
            continue

        priority = _adjust_priority(hint, context.user_level, context.learning_progress)
        relevant.append(replace(hint, priority=priority))

    relevant.sort(key=lambda h: PRIORITY_ORDER[h.priority], reverse=True)

    logger.debug(
        "smart_hints_generated",
        language=context.language,
        matched=len(relevant),
        returned=min(len(relevant), MAX_HINTS),
    )
    return relevant[:MAX_HINTS]


def get_contextual_hints(code: str, language: str) -> list[SmartHint]:
    """Hints for a code snippet with default learner context."""
    return generate_smart_hints(HintContext(language=language, code=code))


def get_learning_path_suggestions(language: str, current_concepts: list[str]) -> list[str]:
    """Next three concepts to study in a language's concept path."""
    path = CONCEPT_PATHS.get(language.lower(), ())
    start = len(current_concepts)
    return list(path[start : start + 3])


def get_personalized_recommendations(
    learning_progress: int, common_mistakes: list[str]
) -> list[str]:
    """Generic study advice based on overall progress."""
    if learning_progress < 30:
        recommendations = [
            "Focus on fundamentals and basic syntax",
            "Practice with simple exercises",
            "Review basic concepts regularly",
        ]
    elif learning_progress < 70:
        recommendations = [
            "Work on intermediate concepts",
            "Practice with real-world examples",
            "Learn best practices and patterns",
        ]
    else:
        recommendations = [
            "Focus on advanced topics",
            "Build complex projects",
            "Learn about performance optimization",
        ]

    if common_mistakes:
        recommendations.append("Review areas where you commonly make mistakes")

    return recommendations


def describe_action(action: str) -> str:
    """Human-readable description of a hint interaction.

    Raises:
        UnknownActionError: If the action isn't one of HINT_ACTIONS
    """
    try:
        return HINT_ACTIONS[action]
    except KeyError:
        raise UnknownActionError(action) from None
