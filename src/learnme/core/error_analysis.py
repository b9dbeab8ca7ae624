"""Error explanations for learners.

Matches an error message against an ordered table of regular expressions
(case-insensitive, first match wins) and returns a canned explanation with
fix suggestions, examples and related concepts. Anything unrecognized gets a
generic "Unknown Error" analysis.

Public functions:
- analyze_error(error, language) -> ErrorAnalysis
- get_common_mistakes(language) -> list[ErrorAnalysis]
- get_learning_resources(error_type) -> list[str]
- analyze_code_errors(code, language, error) -> CodeErrorReport
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Literal

Severity = Literal["low", "medium", "high"]
ErrorKind = Literal["syntax", "runtime", "logic", "unknown"]


@dataclass(frozen=True)
class ErrorAnalysis:
    type: str
    severity: Severity
    explanation: str
    suggestions: tuple[str, ...]
    examples: tuple[str, ...] = ()
    related_concepts: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "severity": self.severity,
            "explanation": self.explanation,
            "suggestions": list(self.suggestions),
            "examples": list(self.examples),
            "relatedConcepts": list(self.related_concepts),
        }


@dataclass
class CodeErrorReport:
    """Coarse classification of a failure, used for debugging tips."""

    type: ErrorKind
    suggestions: list[str] = field(default_factory=list)
    common_fixes: list[str] = field(default_factory=list)


# Ordered: first match wins
ERROR_PATTERNS: tuple[tuple[re.Pattern[str], ErrorAnalysis], ...] = (
    (
        re.compile(r"ReferenceError:.*is not defined", re.IGNORECASE),
        ErrorAnalysis(
            type="ReferenceError",
            severity="medium",
            explanation=(
                "You're trying to use a variable or function that hasn't been "
                "declared or is out of scope."
            ),
            suggestions=(
                "Check if the variable name is spelled correctly",
                "Make sure the variable is declared before using it",
                "Check if the variable is in the correct scope",
                "For functions, ensure they are defined or imported",
            ),
            examples=(
                '// ❌ Wrong\nconsole.log(myVariable);\n\n'
                '// ✅ Correct\nlet myVariable = "Hello";\nconsole.log(myVariable);',
            ),
            related_concepts=("Variable Declaration", "Scope", "Hoisting", "Import/Export"),
        ),
    ),
    (
        re.compile(r"SyntaxError:.*Unexpected token", re.IGNORECASE),
        ErrorAnalysis(
            type="SyntaxError",
            severity="high",
            explanation=(
                "There's a syntax error in your code - the JavaScript engine found "
                "something it wasn't expecting."
            ),
            suggestions=(
                "Check for missing or extra brackets, parentheses, or semicolons",
                "Look for unclosed strings or comments",
                "Verify that all opening brackets have matching closing brackets",
                "Check for proper comma usage in objects and arrays",
            ),
            examples=(
                '// ❌ Wrong\nconsole.log("Hello world;\n\n'
                '// ✅ Correct\nconsole.log("Hello world");',
            ),
            related_concepts=(
                "Syntax",
                "Brackets and Parentheses",
                "String Literals",
                "Object Literals",
            ),
        ),
    ),
    (
        re.compile(r"TypeError:.*is not a function", re.IGNORECASE),
        ErrorAnalysis(
            type="TypeError",
            severity="medium",
            explanation=(
                "You're trying to call something as a function, but it's not "
                "actually a function."
            ),
            suggestions=(
                "Check if the function name is spelled correctly",
                "Make sure the function is defined before calling it",
                "Verify that you're not trying to call a property or variable as a function",
                "Check if the function is properly imported or accessible",
            ),
            examples=(
                '// ❌ Wrong\nlet name = "John";\nname();\n\n'
                '// ✅ Correct\nfunction greet() {\n  return "Hello";\n}\ngreet();',
            ),
            related_concepts=(
                "Functions",
                "Function Declaration",
                "Function Expression",
                "Method Calls",
            ),
        ),
    ),
    (
        re.compile(r"NameError:.*is not defined", re.IGNORECASE),
        ErrorAnalysis(
            type="NameError",
            severity="medium",
            explanation=(
                "You're trying to use a variable or function that hasn't been "
                "defined in Python."
            ),
            suggestions=(
                "Check if the variable name is spelled correctly",
                "Make sure the variable is assigned before using it",
                "Check if you need to import a module",
                "Verify the variable is in the correct scope",
            ),
            examples=(
                '# ❌ Wrong\nprint(my_variable)\n\n'
                '# ✅ Correct\nmy_variable = "Hello"\nprint(my_variable)',
                "# ❌ Wrong\nimport math\nprint(sqrt(16))\n\n"
                "# ✅ Correct\nimport math\nprint(math.sqrt(16))",
            ),
            related_concepts=("Variable Assignment", "Import Statements", "Scope", "Namespaces"),
        ),
    ),
    (
        re.compile(r"IndentationError", re.IGNORECASE),
        ErrorAnalysis(
            type="IndentationError",
            severity="high",
            explanation=(
                "Python uses indentation to define code blocks. Your indentation "
                "is inconsistent or incorrect."
            ),
            suggestions=(
                "Use consistent indentation (spaces or tabs, but not both)",
                "Make sure all lines in a block have the same indentation level",
                "Check for mixed tabs and spaces",
                "Use 4 spaces per indentation level (Python standard)",
            ),
            examples=(
                '# ❌ Wrong\nif True:\nprint("This will cause an error")\n\n'
                '# ✅ Correct\nif True:\n    print("This is properly indented")',
            ),
            related_concepts=("Indentation", "Code Blocks", "Control Flow", "Python Syntax"),
        ),
    ),
    (
        re.compile(r"TypeError:.*object is not callable", re.IGNORECASE),
        ErrorAnalysis(
            type="TypeError",
            severity="medium",
            explanation=(
                "You're trying to call something as a function, but it's not "
                "callable in Python."
            ),
            suggestions=(
                "Check if the function name is spelled correctly",
                "Make sure you're not overriding a built-in function name",
                "Verify that the object is actually a function",
                "Check if you need to import the function",
            ),
            examples=(
                "# ❌ Wrong\nlist = [1, 2, 3]\nlist()\n\n"
                "# ✅ Correct\nmy_list = [1, 2, 3]\nlen(my_list)",
            ),
            related_concepts=(
                "Functions",
                "Built-in Functions",
                "Variable Names",
                "Callable Objects",
            ),
        ),
    ),
    (
        re.compile(r"SyntaxError:.*Mismatched braces", re.IGNORECASE),
        ErrorAnalysis(
            type="SyntaxError",
            severity="high",
            explanation=(
                "Your CSS has mismatched opening and closing braces, which breaks the syntax."
            ),
            suggestions=(
                "Count your opening and closing braces",
                "Make sure each opening brace { has a matching closing brace }",
                "Check for missing or extra braces in your CSS rules",
                "Use a code editor with brace matching to help identify issues",
            ),
            examples=(
                "/* ❌ Wrong */\nbody {\n    margin: 0;\n\n"
                "/* ✅ Correct */\nbody {\n    margin: 0;\n}",
            ),
            related_concepts=("CSS Syntax", "CSS Rules", "Selectors", "Properties"),
        ),
    ),
    (
        re.compile(r"SecurityError:.*Dangerous CSS properties", re.IGNORECASE),
        ErrorAnalysis(
            type="SecurityError",
            severity="high",
            explanation=(
                "You're using CSS properties that could be dangerous for security reasons."
            ),
            suggestions=(
                "Avoid using expression() in CSS",
                "Be careful with url() functions that could load external resources",
                "Use safe CSS properties and values",
                "Consider using CSS custom properties for dynamic values",
            ),
            examples=(
                "/* ❌ Dangerous */\nwidth: expression(document.body.clientWidth);\n\n"
                "/* ✅ Safe */\nwidth: 100%;",
            ),
            related_concepts=(
                "CSS Security",
                "CSS Properties",
                "Safe CSS Practices",
                "CSS Custom Properties",
            ),
        ),
    ),
    (
        re.compile(r"Unclosed tag", re.IGNORECASE),
        ErrorAnalysis(
            type="HTML Syntax Error",
            severity="medium",
            explanation=(
                "You have an HTML tag that isn't properly closed, which can cause "
                "rendering issues."
            ),
            suggestions=(
                "Make sure all opening tags have corresponding closing tags",
                "Check for self-closing tags that don't need closing tags (like <img>, <br>)",
                "Verify that tags are nested properly",
                "Use an HTML validator to check your markup",
            ),
            examples=(
                "<!-- ❌ Wrong -->\n<div>\n    <h1>Title\n</div>\n\n"
                "<!-- ✅ Correct -->\n<div>\n    <h1>Title</h1>\n</div>",
            ),
            related_concepts=(
                "HTML Tags",
                "HTML Structure",
                "Self-closing Tags",
                "HTML Validation",
            ),
        ),
    ),
    (
        re.compile(r"Invalid attribute", re.IGNORECASE),
        ErrorAnalysis(
            type="HTML Attribute Error",
            severity="low",
            explanation=(
                "You're using an HTML attribute that doesn't exist or is used incorrectly."
            ),
            suggestions=(
                "Check the HTML specification for valid attributes",
                "Make sure attribute names are spelled correctly",
                "Verify that attributes are used on the correct elements",
                "Use lowercase for attribute names",
            ),
            examples=(
                '<!-- ❌ Wrong -->\n<img src="image.jpg" href="link.html">\n\n'
                '<!-- ✅ Correct -->\n<img src="image.jpg" alt="Description">',
            ),
            related_concepts=(
                "HTML Attributes",
                "HTML Elements",
                "HTML Standards",
                "Semantic HTML",
            ),
        ),
    ),
)

UNKNOWN_ERROR = ErrorAnalysis(
    type="Unknown Error",
    severity="medium",
    explanation=(
        "This is an error that occurred during code execution. The specific cause "
        "needs further investigation."
    ),
    suggestions=(
        "Check the error message carefully for clues",
        "Verify your code syntax is correct",
        "Make sure all variables and functions are properly defined",
        "Test your code step by step to isolate the issue",
    ),
    related_concepts=("Debugging", "Code Review", "Error Handling"),
)

COMMON_MISTAKES: dict[str, tuple[ErrorAnalysis, ...]] = {
    "javascript": (
        ErrorAnalysis(
            type="Common JavaScript Mistake",
            severity="medium",
            explanation="Using == instead of === for comparison",
            suggestions=(
                "Use === for strict equality comparison",
                "Use !== for strict inequality comparison",
                "Only use == when you specifically need type coercion",
            ),
            examples=(
                '// ❌ Loose equality\nif (5 == "5") { }\n\n'
                '// ✅ Strict equality\nif (5 === "5") { }',
            ),
            related_concepts=("Equality Operators", "Type Coercion", "Comparison Operators"),
        ),
    ),
    "python": (
        ErrorAnalysis(
            type="Common Python Mistake",
            severity="medium",
            explanation="Using mutable default arguments",
            suggestions=(
                "Use None as default argument instead of mutable objects",
                "Create mutable objects inside the function if needed",
                "Be aware of how Python handles default arguments",
            ),
            examples=(
                "# ❌ Mutable default\ndef add_item(item, items=[]):\n"
                "    items.append(item)\n    return items\n\n"
                "# ✅ Immutable default\ndef add_item(item, items=None):\n"
                "    if items is None:\n        items = []\n"
                "    items.append(item)\n    return items",
            ),
            related_concepts=("Default Arguments", "Mutable vs Immutable", "Function Parameters"),
        ),
    ),
}

LEARNING_RESOURCES: dict[str, list[str]] = {
    "ReferenceError": [
        "MDN: JavaScript Variables",
        "MDN: JavaScript Scope",
        "MDN: JavaScript Hoisting",
    ],
    "SyntaxError": [
        "MDN: JavaScript Syntax",
        "JavaScript Style Guide",
        "Code Style Best Practices",
    ],
    "TypeError": [
        "MDN: JavaScript Functions",
        "MDN: JavaScript Objects",
        "JavaScript Type System",
    ],
    "NameError": [
        "Python Variables and Assignment",
        "Python Import System",
        "Python Scope and Namespaces",
    ],
    "IndentationError": [
        "Python Style Guide (PEP 8)",
        "Python Indentation Rules",
        "Python Code Blocks",
    ],
}

GENERAL_RESOURCES = [
    "General Programming Best Practices",
    "Language Documentation",
    "Code Review Guidelines",
]

DEFAULT_DEBUG_SUGGESTIONS = (
    "Review the error message carefully",
    "Check for typos and missing characters",
    "Ensure all brackets and parentheses are properly closed",
)


def analyze_error(error: str, language: str | None = None) -> ErrorAnalysis:
    """Explain an error message. Never returns None: unknown errors get UNKNOWN_ERROR.

    The language is accepted for symmetry with the other helpers; the
    patterns themselves identify the language.
    """
    for pattern, analysis in ERROR_PATTERNS:
        if pattern.search(error):
            return analysis
    return UNKNOWN_ERROR


def get_common_mistakes(language: str) -> list[ErrorAnalysis]:
    return list(COMMON_MISTAKES.get(language.lower(), ()))


def get_learning_resources(error_type: str) -> list[str]:
    return list(LEARNING_RESOURCES.get(error_type, GENERAL_RESOURCES))


def analyze_code_errors(code: str, language: str, error: str) -> CodeErrorReport:
    """Classify a failure as syntax, runtime, logic or unknown.

    Classification looks at the error text only; the code is used to spot a
    few missing-punctuation mistakes in JavaScript and Python syntax errors.
    """
    lower_error = error.lower()
    lower_code = code.lower()
    report = CodeErrorReport(type="unknown")

    if any(word in lower_error for word in ("syntax", "unexpected", "missing")):
        report.type = "syntax"
        if language == "javascript":
            if "function" in lower_code and "{" not in lower_code:
                report.suggestions.append("Missing opening brace after function declaration")
                report.common_fixes.append("Add { after function parameters")
            if "if" in lower_code and "(" not in lower_code:
                report.suggestions.append("Missing parentheses around if condition")
                report.common_fixes.append("Add parentheses: if (condition)")
        elif language == "python":
            if "def" in lower_code and ":" not in lower_code:
                report.suggestions.append("Missing colon after function definition")
                report.common_fixes.append("Add : after function parameters")
            if "if" in lower_code and ":" not in lower_code:
                report.suggestions.append("Missing colon after if statement")
                report.common_fixes.append("Add : after if condition")
    elif any(word in lower_error for word in ("undefined", "null", "reference")):
        report.type = "runtime"
        report.suggestions.append("Variable might be undefined or not declared")
        report.common_fixes.append("Check variable declaration and scope")
    elif "wrong" in lower_error:
        report.type = "logic"
        report.suggestions.append("Check your logic and variable values")
        report.common_fixes.append("Add console.log() to debug variable values")

    if not report.suggestions:
        report.suggestions.extend(DEFAULT_DEBUG_SUGGESTIONS)

    return report
