"""Shared test fixtures."""

import os
import time
import uuid

os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("OPENAI_API_KEY", "test-key")

import pytest
from fastapi.testclient import TestClient

from study_buddy.main import app


class FakeLLMClient:
    """Stands in for the completion provider; records every prompt it receives."""

    model = "gpt-4.1-nano"

    def __init__(self):
        self.reply = "Start by..."
        self.error: Exception | None = None
        self.calls: list[list[dict]] = []

    async def generate(self, messages: list[dict]) -> dict:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return {"content": self.reply, "finish_reason": "stop", "input_tokens": 12, "output_tokens": 3}


@pytest.fixture(scope="module")
def fake_llm():
    return FakeLLMClient()


@pytest.fixture(scope="module")
def client(fake_llm):
    app.state.llm_client = fake_llm
    with TestClient(app) as test_client:
        yield test_client
    del app.state.llm_client


@pytest.fixture(autouse=True)
def reset_fake_llm(fake_llm):
    fake_llm.reply = "Start by..."
    fake_llm.error = None
    fake_llm.calls.clear()


@pytest.fixture(scope="module")
def test_email():
    return f"test_{uuid.uuid4().hex[:8]}@example.com"


@pytest.fixture(scope="module")
def test_password():
    return "SecureTestPass123"


@pytest.fixture(scope="module")
def auth_tokens(client, test_email, test_password):
    """Register a user and return tokens."""
    resp = client.post("/api/v1/auth/register", json={"email": test_email, "password": test_password})
    assert resp.status_code == 201
    return resp.json()["data"]


@pytest.fixture(scope="module")
def auth_header(auth_tokens):
    return {"Authorization": f"Bearer {auth_tokens['access_token']}"}


@pytest.fixture
def other_header(client):
    email = f"other_{uuid.uuid4().hex[:8]}@example.com"
    reg = client.post("/api/v1/auth/register", json={"email": email, "password": "OtherPass123"})
    return {"Authorization": f"Bearer {reg.json()['data']['access_token']}"}


@pytest.fixture
def wait_for_messages(client):
    """Poll until the background worker has written ``count`` messages."""

    def wait(conv_id, headers, count, timeout=5.0):
        deadline = time.monotonic() + timeout
        while True:
            msgs = client.get(f"/api/v1/conversations/{conv_id}/messages", headers=headers).json()["data"]
            if len(msgs) >= count or time.monotonic() > deadline:
                return msgs
            time.sleep(0.05)

    return wait
