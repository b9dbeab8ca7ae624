"""Tests for the smart hints engine."""

import pytest

from learnme.core.smart_hints import (
    HINT_ACTIONS,
    MAX_HINTS,
    HintContext,
    UnknownActionError,
    describe_action,
    generate_smart_hints,
    get_contextual_hints,
    get_learning_path_suggestions,
    get_personalized_recommendations,
)


def _ids(hints):
    return [h.id for h in hints]


class TestGenerateSmartHints:
    """Tests for generate_smart_hints()."""

    def test_var_declaration(self):
        """`var` triggers the scoping hint."""
        hints = generate_smart_hints(HintContext(language="javascript", code="var x = 1;"))
        assert _ids(hints) == ["js-var-declaration"]
        assert hints[0].priority == "medium"

    def test_language_is_case_insensitive(self):
        hints = generate_smart_hints(HintContext(language="JavaScript", code="var x = 1;"))
        assert _ids(hints) == ["js-var-declaration"]

    def test_unknown_language_has_no_hints(self):
        assert generate_smart_hints(HintContext(language="cobol", code="var x")) == []

    def test_no_triggers_no_hints(self):
        assert generate_smart_hints(HintContext(language="python", code="x = 1")) == []

    def test_at_most_three_sorted_by_priority(self):
        """Highest priority first; ties keep table order."""
        code = "def f(items=[]):\n    for x in items:\n        print('%s' % x)\n"
        hints = generate_smart_hints(HintContext(language="python", code=code))

        assert len(hints) == MAX_HINTS
        assert _ids(hints) == ["py-f-string", "py-default-args", "py-list-comprehension"]
        assert [h.priority for h in hints] == ["high", "high", "medium"]

    def test_previous_hints_are_skipped(self):
        context = HintContext(
            language="javascript",
            code="var x = 1;",
            previous_hints=["js-var-declaration"],
        )
        assert generate_smart_hints(context) == []

    def test_beginner_raises_low_priority(self):
        """Low-priority hints become medium for beginners."""
        context = HintContext(language="javascript", code="const n = person.name;")
        hints = generate_smart_hints(context)
        assert _ids(hints) == ["js-destructuring"]
        assert hints[0].priority == "medium"

    def test_intermediate_keeps_low_priority(self):
        context = HintContext(
            language="javascript",
            code="const n = person.name;",
            user_level="intermediate",
        )
        assert generate_smart_hints(context)[0].priority == "low"

    def test_low_progress_raises_low_priority(self):
        context = HintContext(
            language="javascript",
            code="const n = person.name;",
            user_level="advanced",
            learning_progress=10,
        )
        assert generate_smart_hints(context)[0].priority == "medium"

    def test_advanced_lowers_high_priority(self):
        context = HintContext(
            language="javascript",
            code="if (a == b) {}",
            user_level="advanced",
        )
        hints = generate_smart_hints(context)
        assert _ids(hints) == ["js-strict-equality"]
        assert hints[0].priority == "medium"

    def test_high_progress_lowers_high_priority(self):
        context = HintContext(language="javascript", code="if (a == b) {}", learning_progress=80)
        assert generate_smart_hints(context)[0].priority == "medium"

    def test_table_is_not_mutated(self):
        """Re-prioritizing returns copies, the table keeps its priorities."""
        generate_smart_hints(
            HintContext(language="javascript", code="if (a == b) {}", learning_progress=80)
        )
        hints = generate_smart_hints(HintContext(language="javascript", code="if (a == b) {}"))
        assert hints[0].priority == "high"

    def test_to_dict_is_camel_case(self):
        hint = generate_smart_hints(HintContext(language="javascript", code="var x = 1;"))[0]
        data = hint.to_dict()
        assert data["codeSuggestion"] == "let variableName = value;"
        assert "relatedConcepts" in data


class TestContextualHints:
    def test_default_context(self):
        hints = get_contextual_hints("<div>hi</div>", "html")
        assert _ids(hints) == ["html-semantic"]


class TestLearningPathSuggestions:
    """Tests for get_learning_path_suggestions()."""

    def test_first_three_concepts(self):
        assert get_learning_path_suggestions("python", []) == [
            "Variables and Data Types",
            "Control Flow",
            "Functions and Modules",
        ]

    def test_skips_known_concepts(self):
        result = get_learning_path_suggestions("css", ["a", "b", "c", "d", "e", "f", "g"])
        assert result == ["CSS Architecture"]

    def test_unknown_language(self):
        assert get_learning_path_suggestions("brainfuck", []) == []


class TestPersonalizedRecommendations:
    """Tests for get_personalized_recommendations()."""

    def test_low_progress(self):
        result = get_personalized_recommendations(10, [])
        assert result[0] == "Focus on fundamentals and basic syntax"
        assert len(result) == 3

    def test_mid_progress(self):
        assert get_personalized_recommendations(30, [])[0] == "Work on intermediate concepts"

    def test_high_progress(self):
        assert get_personalized_recommendations(70, [])[0] == "Focus on advanced topics"

    def test_common_mistakes_add_review(self):
        result = get_personalized_recommendations(50, ["off-by-one"])
        assert result[-1] == "Review areas where you commonly make mistakes"
        assert len(result) == 4


class TestDescribeAction:
    @pytest.mark.parametrize("action", sorted(HINT_ACTIONS))
    def test_known_actions(self, action):
        assert describe_action(action) == HINT_ACTIONS[action]

    def test_unknown_action_raises(self):
        with pytest.raises(UnknownActionError) as exc_info:
            describe_action("explode")
        assert exc_info.value.action == "explode"
