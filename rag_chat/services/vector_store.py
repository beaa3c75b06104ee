from pydantic import ValidationError

from rag_chat.core.config import settings
from rag_chat.core.errors import UpstreamError
from rag_chat.schemas.chat import Source
from rag_chat.services.upstream import post_json


def _headers(**extra) -> dict:
    key = settings.SUPABASE_SERVICE_ROLE_KEY
    return {
        "Authorization": f"Bearer {key}",
        "apikey": key,
        "Content-Type": "application/json",
        **extra,
    }


def _rest_url(path: str) -> str:
    return f"{settings.SUPABASE_URL.rstrip('/')}/rest/v1/{path}"


def query_vectors(embedding: list[float], match_count: int | None = None, source: str | None = None) -> list[Source]:
    data = post_json(
        "supabase",
        "Supabase query",
        _rest_url(f"rpc/{settings.SUPABASE_MATCH_FUNCTION}"),
        payload={
            "query_embedding": embedding,
            "match_count": match_count or settings.MATCH_COUNT,
            "filter": {"source": source or settings.SOURCE_FILTER},
        },
        headers=_headers(),
    )
    if data is None:
        return []
    if not isinstance(data, list):
        raise UpstreamError("supabase", "Supabase query failed: unexpected response shape")
    try:
        return [Source.model_validate(row) for row in data if isinstance(row, dict)]
    except ValidationError:
        raise UpstreamError("supabase", "Supabase query failed: unexpected response shape")


def filter_by_similarity(chunks: list[Source], threshold: float | None = None) -> list[Source]:
    threshold = settings.SIMILARITY_THRESHOLD if threshold is None else threshold
    return [c for c in chunks if c.similarity > threshold]


def insert_chunks(rows: list[dict]) -> None:
    """
    rows: [{"content": str, "metadata": dict, "embedding": list[float]}]
    None metadata values are dropped so the jsonb column holds no nulls.
    """
    payload = [
        {
            "content": r["content"],
            "metadata": {k: v for k, v in (r.get("metadata") or {}).items() if v is not None},
            "embedding": r["embedding"],
        }
        for r in rows
    ]
    post_json(
        "supabase",
        "Supabase insert",
        _rest_url(settings.SUPABASE_TABLE),
        payload=payload,
        headers=_headers(Prefer="return=minimal"),
    )
