"""Shared fixtures for the writing agent tests."""

import os

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda

os.environ.setdefault("GEMINI_API_KEY", "test-key")

import agent.agent as gemini  # noqa: E402
from agent.core.memory import roleplay_store, therapist_store  # noqa: E402


class FakeModel:
    """Stands in for Gemini: hands out queued replies and records prompts."""

    def __init__(self):
        self.replies = []
        self.prompts = []
        self.error = None

    def respond(self, prompt_value):
        self.prompts.append(prompt_value.to_messages())
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.replies.pop(0))


@pytest.fixture(autouse=True)
def reset_stores():
    roleplay_store.clear()
    therapist_store.clear()
    yield
    roleplay_store.clear()
    therapist_store.clear()


@pytest.fixture
def model(monkeypatch):
    fake = FakeModel()
    monkeypatch.setattr(gemini, "build_llm", lambda: RunnableLambda(lambda pv: fake.respond(pv)))
    return fake


@pytest.fixture
def client():
    from app.main import app
    return TestClient(app)
