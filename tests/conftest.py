import pytest
from fastapi.testclient import TestClient

from rag_chat.core.config import settings
from rag_chat.main import app


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else ("" if body is None else str(body))
        self.content = b"" if body is None and not text else self.text.encode()

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("no JSON body")
        return self._body


class FakeUpstream:
    """
    Stands in for requests.post. Routes by URL fragment and records every
    call as (provider, url, json, params).
    """

    def __init__(self):
        self.calls = []
        self.routes = {
            "huggingface": FakeResponse(200, [[0.1, 0.2, 0.3]]),
            "supabase": FakeResponse(200, []),
            "gemini": FakeResponse(200, {"candidates": [{"content": {"parts": [{"text": "An answer [1]."}]}}]}),
        }

    @staticmethod
    def provider_for(url):
        if "rest/v1" in url:
            return "supabase"
        if "generateContent" in url:
            return "gemini"
        return "huggingface"

    def __call__(self, url, json=None, headers=None, params=None, timeout=None):
        provider = self.provider_for(url)
        self.calls.append((provider, url, json, params))
        resp = self.routes[provider]
        if isinstance(resp, Exception):
            raise resp
        return resp

    def providers(self):
        return [c[0] for c in self.calls]

    def payload(self, provider):
        return next(c[2] for c in self.calls if c[0] == provider)


@pytest.fixture
def creds(monkeypatch):
    monkeypatch.setattr(settings, "HUGGINGFACE_API_KEY", "hf-test")
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "gem-test")
    monkeypatch.setattr(settings, "SUPABASE_URL", "https://proj.supabase.co")
    monkeypatch.setattr(settings, "SUPABASE_SERVICE_ROLE_KEY", "svc-test")
    monkeypatch.setattr(settings, "API_BEARER_TOKEN", None)
    monkeypatch.setattr(settings, "SIMILARITY_THRESHOLD", 0.3)
    monkeypatch.setattr(settings, "MATCH_COUNT", 12)
    return settings


@pytest.fixture
def upstream(monkeypatch, creds):
    fake = FakeUpstream()
    monkeypatch.setattr("rag_chat.services.upstream.requests.post", fake)
    return fake


@pytest.fixture
def client():
    return TestClient(app)


def chunk(similarity, page=1, content="text", **extra):
    return {
        "id": extra.pop("id", page),
        "content": content,
        "similarity": similarity,
        "metadata": {"source": "../dataset/human-nutrition-text.pdf", "page": page},
        **extra,
    }
