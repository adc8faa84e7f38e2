# tests/conftest.py
from types import SimpleNamespace

import mongomock
import pytest
from fastapi.testclient import TestClient
from openai import OpenAIError

from ats_portal.db.mongodb import get_users_collection, init_mongo_indexes
from ats_portal.main import app
from ats_portal.services.llm_client import LLMClient, get_llm_client
from ats_portal.utils import file_upload


SAMPLE_RESUME = """Jane Doe
Backend developer focused on Python and cloud services.

EXPERIENCE
Software Engineering Intern, Acme (2023)
- Built REST APIs with python and docker on aws

SKILLS
python sql docker aws git

EDUCATION
B.Tech Computer Science
"""


class FakeCompletions:
    """Scripted stand-in for client.chat.completions."""

    def __init__(self, replies, unavailable):
        self.replies = list(replies)
        self.unavailable = set(unavailable)
        self.calls = []

    def create(self, model, messages, **kwargs):
        prompt = messages[-1]["content"]
        self.calls.append({
            "model": model,
            "prompt": prompt,
            "max_tokens": kwargs.get("max_tokens"),
            "timeout": kwargs.get("timeout"),
        })
        if model in self.unavailable:
            raise OpenAIError(f"model {model} not found")
        if prompt == "Hello":
            content = "Hi"
        else:
            reply = self.replies.pop(0) if self.replies else ""
            if isinstance(reply, Exception):
                raise reply
            content = reply
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeOpenAI:
    def __init__(self, replies=(), unavailable=()):
        self.completions = FakeCompletions(replies, unavailable)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self):
        return self.completions.calls

    @property
    def generation_calls(self):
        return [c for c in self.completions.calls if c["prompt"] != "Hello"]


def make_llm(replies=(), unavailable=(), models=("model-a", "model-b")):
    fake = FakeOpenAI(replies=replies, unavailable=unavailable)
    return LLMClient(client=fake, models=list(models), request_timeout=5, total_timeout=30), fake


class FakePage:
    def __init__(self, text):
        self._text = text

    def extract_text(self):
        return self._text


class FakePdfReader:
    """Treats the uploaded bytes as the PDF's text; b"BROKEN" fails to parse."""

    def __init__(self, stream):
        data = stream.read()
        if data.startswith(b"BROKEN"):
            raise ValueError("EOF marker not found")
        self.pages = [FakePage(data.decode("utf-8"))]


@pytest.fixture
def fake_pdf(monkeypatch):
    monkeypatch.setattr(file_upload, "PyPDF2", SimpleNamespace(PdfReader=FakePdfReader))


@pytest.fixture
def users_collection():
    collection = mongomock.MongoClient().db.users
    init_mongo_indexes(collection)
    return collection


@pytest.fixture
def llm():
    """Default scripted LLM; tests append replies to fake.completions.replies."""
    return make_llm()


@pytest.fixture
def client(users_collection, llm):
    ai_client, _ = llm
    app.dependency_overrides[get_users_collection] = lambda: users_collection
    app.dependency_overrides[get_llm_client] = lambda: ai_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    def _signup(email="jane@example.com", password="secret123", first_name="Jane", last_name="Doe"):
        return client.post("/signup", json={
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "password": password,
        })
    return _signup
