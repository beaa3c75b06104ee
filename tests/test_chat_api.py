import requests
from fastapi.testclient import TestClient

from rag_chat.api.deps import verify_bearer
from rag_chat.main import app

from conftest import FakeResponse, chunk


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_grounded_answer_returns_filtered_sources_in_order(client, upstream):
    rows = [chunk(0.9, page=3, id=1), chunk(0.2, page=4, id=2), chunk(0.31, page=7, id=3), chunk(0.3, page=8, id=4)]
    upstream.routes["supabase"] = FakeResponse(200, rows)

    r = client.post("/rag-chat", json={"message": "What does water do?"})

    assert r.status_code == 200
    body = r.json()
    assert body["answer"] == "An answer [1]."
    assert [s["id"] for s in body["sources"]] == [1, 3]
    assert body["sources"][0]["metadata"] == {"source": "../dataset/human-nutrition-text.pdf", "page": 3}
    assert upstream.providers() == ["huggingface", "supabase", "gemini"]

    prompt = upstream.payload("gemini")["contents"][0]["parts"][0]["text"]
    assert "CONTEXT:" in prompt
    assert "[1] (Page 3) text\n\n[2] (Page 7) text" in prompt


def test_all_below_threshold_is_ungrounded(client, upstream):
    upstream.routes["supabase"] = FakeResponse(200, [chunk(0.3), chunk(0.1)])

    r = client.post("/rag-chat", json={"message": "hello"})

    assert r.status_code == 200
    assert r.json()["sources"] == []
    prompt = upstream.payload("gemini")["contents"][0]["parts"][0]["text"]
    assert "CONTEXT:" not in prompt


def test_request_payloads(client, upstream, monkeypatch):
    monkeypatch.setattr("rag_chat.core.config.settings.TEMPERATURE", 0.2)
    client.post("/rag-chat", json={"message": "  vitamins?  "})

    assert upstream.payload("huggingface")["inputs"] == "  vitamins?  "
    rpc = upstream.payload("supabase")
    assert rpc["query_embedding"] == [0.1, 0.2, 0.3]  # unwrapped from [[...]]
    assert rpc["match_count"] == 12
    assert rpc["filter"] == {"source": "../dataset/human-nutrition-text.pdf"}

    gen = upstream.payload("gemini")
    assert gen["generationConfig"] == {"temperature": 0.2}
    assert gen["systemInstruction"]["parts"][0]["text"]
    gemini_call = next(c for c in upstream.calls if c[0] == "gemini")
    assert gemini_call[3] == {"key": "gem-test"}


def test_flat_embedding_is_used_as_is(client, upstream):
    upstream.routes["huggingface"] = FakeResponse(200, [0.5, 0.25])
    client.post("/rag-chat", json={"message": "q"})
    assert upstream.payload("supabase")["query_embedding"] == [0.5, 0.25]


def test_embedding_failure_stops_pipeline(client, upstream):
    upstream.routes["huggingface"] = FakeResponse(503, text="loading")

    r = client.post("/rag-chat", json={"message": "q"})

    assert r.status_code == 500
    assert r.json() == {"error": "Embedding generation failed: 503"}
    assert upstream.providers() == ["huggingface"]


def test_retrieval_failure_stops_pipeline(client, upstream):
    upstream.routes["supabase"] = FakeResponse(401, text="denied")

    r = client.post("/rag-chat", json={"message": "q"})

    assert r.status_code == 500
    assert r.json() == {"error": "Supabase query failed: 401"}
    assert upstream.providers() == ["huggingface", "supabase"]


def test_generation_failure(client, upstream):
    upstream.routes["gemini"] = FakeResponse(429, text="quota")

    r = client.post("/rag-chat", json={"message": "q"})

    assert r.status_code == 500
    assert r.json() == {"error": "Gemini generation failed: 429"}


def test_upstream_timeout_maps_to_500(client, upstream):
    upstream.routes["supabase"] = requests.Timeout()

    r = client.post("/rag-chat", json={"message": "q"})

    assert r.status_code == 500
    assert r.json() == {"error": "Supabase query failed: timeout"}
    assert "gemini" not in upstream.providers()


def test_missing_candidate_text_falls_back(client, upstream):
    upstream.routes["gemini"] = FakeResponse(200, {"candidates": []})

    r = client.post("/rag-chat", json={"message": "q"})

    assert r.status_code == 200
    assert r.json()["answer"] == "Error generating response from LLM."


def test_non_numeric_embedding_is_upstream_error(client, upstream):
    upstream.routes["huggingface"] = FakeResponse(200, {"error": "model loading"})

    r = client.post("/rag-chat", json={"message": "q"})

    assert r.status_code == 500
    assert "Embedding generation failed" in r.json()["error"]
    assert upstream.providers() == ["huggingface"]


def test_invalid_message_is_400(client, upstream):
    for body in ({}, {"message": ""}, {"message": "   "}, {"message": 42}):
        r = client.post("/rag-chat", json=body)
        assert r.status_code == 400
        assert r.json() == {"error": "Message is required"}
    r = client.post("/rag-chat", content=b"not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert upstream.calls == []


def test_missing_credentials_is_500(client, upstream, monkeypatch):
    monkeypatch.setattr("rag_chat.core.config.settings.GEMINI_API_KEY", None)

    r = client.post("/rag-chat", json={"message": "q"})

    assert r.status_code == 500
    assert r.json() == {"error": "Missing required environment variables: GEMINI_API_KEY"}
    assert upstream.calls == []


def test_unexpected_error_is_500(client, upstream, monkeypatch):
    def boom(question):
        raise KeyError("boom")

    monkeypatch.setattr("rag_chat.api.routes.chat.answer_question", boom)

    r = client.post("/rag-chat", json={"message": "q"})

    assert r.status_code == 500
    assert r.json() == {"error": "'boom'"}


def test_bearer_token_enforced_when_configured(client, upstream, monkeypatch):
    monkeypatch.setattr("rag_chat.core.config.settings.API_BEARER_TOKEN", "s3cret")

    assert client.post("/rag-chat", json={"message": "q"}).status_code == 401
    bad = client.post("/rag-chat", json={"message": "q"}, headers={"Authorization": "Bearer nope"})
    assert bad.json() == {"error": "Invalid token"}
    ok = client.post("/rag-chat", json={"message": "q"}, headers={"Authorization": "Bearer s3cret"})
    assert ok.status_code == 200


def test_cors_preflight(client):
    r = client.options(
        "/rag-chat",
        headers={
            "Origin": "https://example.org",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, content-type",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"


def test_cors_header_on_error_response(client, upstream):
    r = client.post("/rag-chat", json={}, headers={"Origin": "https://example.org"})
    assert r.status_code == 400
    assert r.headers["access-control-allow-origin"] == "*"


def test_null_columns_in_retrieval_rows_use_defaults(client, upstream):
    upstream.routes["supabase"] = FakeResponse(200, [
        chunk(0.9, page=2, id=1),
        {"id": 2, "content": None, "similarity": None, "metadata": None},
    ])

    r = client.post("/rag-chat", json={"message": "q"})

    assert r.status_code == 200
    assert [s["id"] for s in r.json()["sources"]] == [1]


def test_malformed_retrieval_row_is_upstream_error(client, upstream):
    upstream.routes["supabase"] = FakeResponse(200, [{"content": ["not", "text"], "similarity": "high"}])

    r = client.post("/rag-chat", json={"message": "q"})

    assert r.status_code == 500
    assert r.json() == {"error": "Supabase query failed: unexpected response shape"}
    assert "gemini" not in upstream.providers()


def test_error_outside_route_body_is_json_500(upstream):
    def broken_auth():
        raise RuntimeError("auth backend down")

    app.dependency_overrides[verify_bearer] = broken_auth
    try:
        r = TestClient(app, raise_server_exceptions=False).post("/rag-chat", json={"message": "q"})
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 500
    assert r.json() == {"error": "auth backend down"}
    assert upstream.calls == []
