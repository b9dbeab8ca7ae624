"""Tests for learner error explanations."""

import pytest

from learnme.core.error_analysis import (
    GENERAL_RESOURCES,
    UNKNOWN_ERROR,
    analyze_code_errors,
    analyze_error,
    get_common_mistakes,
    get_learning_resources,
)


class TestAnalyzeError:
    """Tests for analyze_error()."""

    @pytest.mark.parametrize(
        "error, expected_type, severity",
        [
            ("ReferenceError: foo is not defined", "ReferenceError", "medium"),
            ("SyntaxError: Unexpected token '}'", "SyntaxError", "high"),
            ("TypeError: x.map is not a function", "TypeError", "medium"),
            ("NameError: name 'spam' is not defined", "NameError", "medium"),
            ("IndentationError: expected an indented block", "IndentationError", "high"),
            ("TypeError: 'list' object is not callable", "TypeError", "medium"),
            ("SecurityError: Dangerous CSS properties not allowed", "SecurityError", "high"),
            ("Unclosed tag <div>", "HTML Syntax Error", "medium"),
            ("Invalid attribute 'hreff'", "HTML Attribute Error", "low"),
        ],
    )
    def test_patterns(self, error, expected_type, severity):
        analysis = analyze_error(error, "javascript")
        assert analysis.type == expected_type
        assert analysis.severity == severity
        assert len(analysis.suggestions) == 4

    def test_case_insensitive(self):
        assert analyze_error("referenceerror: x IS NOT DEFINED").type == "ReferenceError"

    def test_css_braces(self):
        analysis = analyze_error("SyntaxError: Mismatched braces", "css")
        assert analysis.type == "SyntaxError"
        assert "CSS" in analysis.explanation

    def test_unknown(self):
        analysis = analyze_error("Segmentation fault", "c")
        assert analysis is UNKNOWN_ERROR
        assert analysis.type == "Unknown Error"
        assert analysis.examples == ()
        assert analysis.related_concepts == ("Debugging", "Code Review", "Error Handling")

    def test_to_dict(self):
        data = analyze_error("NameError: name 'x' is not defined").to_dict()
        assert data["relatedConcepts"][0] == "Variable Assignment"
        assert len(data["examples"]) == 2


class TestCommonMistakes:
    def test_javascript(self):
        mistakes = get_common_mistakes("JavaScript")
        assert [m.type for m in mistakes] == ["Common JavaScript Mistake"]
        assert "===" in mistakes[0].explanation

    def test_python(self):
        mistakes = get_common_mistakes("python")
        assert mistakes[0].explanation == "Using mutable default arguments"

    def test_other_language(self):
        assert get_common_mistakes("cobol") == []


class TestLearningResources:
    def test_known_type(self):
        assert get_learning_resources("IndentationError")[0] == "Python Style Guide (PEP 8)"

    def test_fallback(self):
        assert get_learning_resources("HTML Syntax Error") == GENERAL_RESOURCES

    def test_returns_copy(self):
        get_learning_resources("Unknown Error").append("mine")
        assert "mine" not in GENERAL_RESOURCES


class TestAnalyzeCodeErrors:
    """Tests for analyze_code_errors()."""

    def test_python_missing_colon(self):
        code = "def greet()\n    pass"
        report = analyze_code_errors(code, "python", "SyntaxError: invalid syntax")
        assert report.type == "syntax"
        assert report.suggestions == ["Missing colon after function definition"]
        assert report.common_fixes == ["Add : after function parameters"]

    def test_javascript_missing_brace(self):
        report = analyze_code_errors("function go() return 1", "javascript", "Unexpected token")
        assert report.type == "syntax"
        assert "Missing opening brace after function declaration" in report.suggestions

    def test_runtime(self):
        report = analyze_code_errors("x.y", "javascript", "Cannot read properties of undefined")
        assert report.type == "runtime"
        assert report.suggestions == ["Variable might be undefined or not declared"]

    def test_logic(self):
        report = analyze_code_errors("total = a - b", "python", "the total is wrong")
        assert report.type == "logic"
        assert report.common_fixes == ["Add console.log() to debug variable values"]

    def test_unknown_gets_default_suggestions(self):
        report = analyze_code_errors("x", "python", "it broke")
        assert report.type == "unknown"
        assert len(report.suggestions) == 3
        assert report.common_fixes == []

    def test_syntax_without_specific_hint(self):
        report = analyze_code_errors("x = 1:", "python", "syntax error")
        assert report.type == "syntax"
        assert report.suggestions[0] == "Review the error message carefully"
