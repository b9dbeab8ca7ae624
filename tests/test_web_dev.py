"""Tests for the Dev tutoring endpoint."""

from datetime import datetime, timedelta, timezone

import pytest

from learnme.core.dev_chat import DevChat
from learnme.llm.client import LLMConfig, LLMError, LLMResponse
from learnme.web.routes.chat import get_dev_chat
from learnme.web.routes.dev import TROUBLE_MESSAGE


class TutorClient:
    def __init__(self, content="Variables store values. For example, x = 5.", error=None):
        self.config = LLMConfig(api_key="sk-test")
        self.content = content
        self.error = error
        self.messages = None

    def chat(self, messages, temperature=None, max_tokens=None):
        if self.error is not None:
            raise self.error
        self.messages = messages
        return LLMResponse(content=self.content, model="gpt-4", provider="openai")


@pytest.fixture
def tutor():
    return TutorClient()


@pytest.fixture
def dev_client(client, tutor):
    client.app.dependency_overrides[get_dev_chat] = lambda: DevChat(client=tutor)
    yield client
    client.app.dependency_overrides.clear()


def _body(message, **session):
    return {
        "message": message,
        "session": {"selectedLanguage": "python", "selectedLevel": "beginner", **session},
        "progress": {"totalTimeSpent": 10, "completedConcepts": [], "exercisesCompleted": 0},
    }


class TestTeach:
    """Tests for POST /api/dev."""

    def test_explanation(self, dev_client, tutor):
        response = dev_client.post("/api/dev", json=_body("Explain variables to me"))
        assert response.status_code == 200
        body = response.json()

        assert body["response"].startswith("Variables store values")
        assert body["analysis"] == {
            "intent": "learn",
            "confidence": 0.9,
            "suggestedAction": "Provide detailed explanation with examples",
        }
        assert body["metadata"]["concept"] == "variables-and-data-types"
        assert "exercise" not in body["metadata"]
        assert body["context"]["language"] == "python"
        assert body["context"]["progress"] == 0
        assert body["context"]["userPreferences"]["learningStyle"] == "hands-on"

        system, user = tutor.messages
        assert "Teaching variables-and-data-types in python (beginner level)" in system.content
        assert 'User message: "Explain variables to me"' in user.content

    def test_hands_on_learner_gets_exercise(self, dev_client, tutor):
        body = dev_client.post("/api/dev", json=_body("hello")).json()
        assert body["analysis"]["intent"] == "general"
        assert body["metadata"]["exercise"] is True
        assert "**Exercise Mode:**" in tutor.messages[0].content

    def test_help_gives_feedback(self, dev_client, tutor, monkeypatch):
        monkeypatch.setattr("learnme.web.routes.dev.should_generate_exercise", lambda c: False)
        body = _body("I'm stuck", learningStyle="theoretical")
        dev_client.post("/api/dev", json=body)
        assert "**Feedback Mode:**" in tutor.messages[0].content

    def test_guidance_passes_message(self, dev_client, tutor, monkeypatch):
        monkeypatch.setattr("learnme.web.routes.dev.should_generate_exercise", lambda c: False)
        dev_client.post("/api/dev", json=_body("good morning", learningStyle="visual"))
        assert tutor.messages[1].content == "good morning"

    def test_concept_completed(self, dev_client):
        body = dev_client.post(
            "/api/dev",
            json=_body("I'm done with this one", currentConcept="variables-and-data-types"),
        ).json()
        assert body["metadata"]["conceptCompleted"] is True
        assert body["metadata"]["nextConcept"] == "functions-basics"
        assert body["context"]["completedConcepts"] == ["variables-and-data-types"]
        assert body["context"]["progress"] == 10

    def test_exercise_completed(self, dev_client):
        body = dev_client.post("/api/dev", json=_body("exercise complete!")).json()
        assert body["analysis"]["intent"] == "practice"
        assert body["metadata"]["exerciseCompleted"] is True
        assert body["context"]["exercisesCompleted"] == 1

    def test_progress_request(self, dev_client):
        body = dev_client.post("/api/dev", json=_body("How am I doing?")).json()
        assert body["analysis"]["intent"] == "progress"
        assert body["metadata"]["showProgress"] is True

    def test_debug_suggestions(self, dev_client):
        body = dev_client.post("/api/dev", json=_body("my loop has a bug")).json()
        assert body["metadata"]["errorType"] == "unknown"
        assert body["metadata"]["debugSuggestions"][0] == "Review the error message carefully"

    def test_time_spent(self, dev_client):
        body = _body("hello")
        last = datetime.now(timezone.utc) - timedelta(minutes=3)
        body["progress"]["lastActivity"] = last.isoformat()
        data = dev_client.post("/api/dev", json=body).json()
        assert data["context"]["totalTimeSpent"] == 13

    def test_suggestions_from_answer(self, client):
        tutor = TutorClient("Next steps:\n- Write a loop over a list\n- Print every item")
        client.app.dependency_overrides[get_dev_chat] = lambda: DevChat(client=tutor)
        try:
            body = client.post("/api/dev", json=_body("hello")).json()
        finally:
            client.app.dependency_overrides.clear()

        assert body["metadata"]["suggestions"] == [
            "Write a loop over a list",
            "Print every item",
        ]

    def test_missing_session(self, dev_client):
        assert dev_client.post("/api/dev", json={"message": "hi"}).status_code == 422

    def test_unknown_level(self, dev_client):
        body = _body("hi", selectedLevel="guru")
        assert dev_client.post("/api/dev", json=body).status_code == 422


class TestTeachFailures:
    def _assert_trouble(self, response):
        assert response.status_code == 500
        body = response.json()
        assert body["response"] == TROUBLE_MESSAGE
        assert body["context"] is None
        assert body["metadata"]["confidence"] == 0.1
        assert len(body["metadata"]["suggestions"]) == 3
        assert body["analysis"] == {
            "intent": "general",
            "confidence": 0.1,
            "suggestedAction": "Provide general guidance",
        }

    def test_unconfigured(self, client):
        self._assert_trouble(client.post("/api/dev", json=_body("explain loops")))

    def test_provider_failure(self, client):
        failing = TutorClient(error=LLMError("LLM call failed: boom"))
        client.app.dependency_overrides[get_dev_chat] = lambda: DevChat(client=failing)
        try:
            response = client.post("/api/dev", json=_body("explain loops"))
        finally:
            client.app.dependency_overrides.clear()

        self._assert_trouble(response)
