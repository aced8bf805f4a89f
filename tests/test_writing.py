"""Tests for the grammar correction and auto-complete endpoints."""

import json

import pytest

import agent.agent as gemini
from config.settings import get_settings


GRAMMAR_OPTIONS = json.dumps(
    [
        {"option": "I am writing to follow up on my order."},
        {"option": "I'd like to follow up regarding my order."},
        {"option": "Following up on the status of my order."},
        {"option": "I'm following up on the order I placed."},
    ]
)


def test_health_endpoint(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_correct_grammar_returns_raw_model_text(client, model):
    model.replies.append(GRAMMAR_OPTIONS)

    resp = client.post("/correct-grammar", json={"sentence": "i want follow up my order"})

    assert resp.status_code == 200
    assert resp.json() == {"correctedSentence": GRAMMAR_OPTIONS}
    prompt_text = model.prompts[0][-1].content
    assert "i want follow up my order" in prompt_text
    assert '"option"' in prompt_text


def test_auto_complete_returns_raw_model_text(client, model):
    model.replies.append('[{"suggestion": " with this project?"}]')

    resp = client.post("/auto-complete", json={"sentence": "What are you trying to do"})

    assert resp.status_code == 200
    assert resp.json() == {"completedSentence": '[{"suggestion": " with this project?"}]'}
    prompt_text = model.prompts[0][-1].content
    assert "What are you trying to do" in prompt_text
    assert '"suggestion"' in prompt_text


def test_sentence_with_braces_is_not_treated_as_template(client, model):
    model.replies.append("[]")

    resp = client.post("/correct-grammar", json={"sentence": "use {curly} braces"})

    assert resp.status_code == 200
    assert "use {curly} braces" in model.prompts[0][-1].content


@pytest.mark.parametrize("path", ["/correct-grammar", "/auto-complete"])
@pytest.mark.parametrize("body", [{}, {"sentence": ""}, {"sentence": "   "}])
def test_missing_sentence(client, model, path, body):
    resp = client.post(path, json=body)

    assert resp.status_code == 400
    data = resp.json()
    assert data["error"] == "Sentence is required"
    assert "details" in data
    assert model.prompts == []


def test_mistyped_sentence_is_bad_request(client, model):
    resp = client.post("/correct-grammar", json={"sentence": ["not", "a", "string"]})

    assert resp.status_code == 400
    data = resp.json()
    assert data["error"] == "Invalid request body"
    assert "sentence" in data["details"]


@pytest.mark.parametrize("path", ["/correct-grammar", "/auto-complete"])
def test_model_failure_is_server_error(client, model, path):
    model.error = RuntimeError("quota exceeded")

    resp = client.post(path, json={"sentence": "hello world"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "AI model error", "details": "quota exceeded"}


def test_missing_api_key_is_server_error(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "google_api_key", None)

    resp = client.post("/auto-complete", json={"sentence": "hello"})

    assert resp.status_code == 500
    data = resp.json()
    assert data["error"] == "AI model error"
    assert "GEMINI_API_KEY" in data["details"]


def test_build_llm_requires_api_key(monkeypatch):
    monkeypatch.setattr(get_settings(), "google_api_key", "")
    with pytest.raises(RuntimeError, match="GEMINI_API_KEY"):
        gemini.build_llm()


@pytest.mark.parametrize("path", ["/correct-grammar", "/auto-complete"])
def test_request_without_body_reports_missing_sentence(client, model, path):
    resp = client.post(path)

    assert resp.status_code == 400
    assert resp.json()["error"] == "Sentence is required"
    assert model.prompts == []
