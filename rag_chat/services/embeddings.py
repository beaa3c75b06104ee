from numbers import Real

from rag_chat.core.config import settings
from rag_chat.core.errors import UpstreamError
from rag_chat.services.upstream import post_json


def _embedding_url() -> str:
    return f"{settings.HF_INFERENCE_URL.rstrip('/')}/{settings.EMBEDDING_MODEL}"


def _headers() -> dict:
    return {
        "Authorization": f"Bearer {settings.HUGGINGFACE_API_KEY}",
        "Content-Type": "application/json",
    }


def _is_vector(v) -> bool:
    return isinstance(v, list) and bool(v) and all(isinstance(x, Real) and not isinstance(x, bool) for x in v)


def unwrap_embedding(data) -> list[float]:
    """
    The inference API answers with either a flat vector or a vector wrapped
    in one extra list ([[...]]). Anything else is treated as an upstream error.
    """
    if isinstance(data, list) and data and isinstance(data[0], list):
        data = data[0]
    if not _is_vector(data):
        raise UpstreamError("huggingface", "Embedding generation failed: unexpected response shape")
    return [float(x) for x in data]


def embed_query(text: str) -> list[float]:
    data = post_json(
        "huggingface",
        "Embedding generation",
        _embedding_url(),
        payload={"inputs": text, "options": {"wait_for_model": True}},
        headers=_headers(),
    )
    return unwrap_embedding(data)


def embed_texts(texts: list[str], batch_size: int | None = None) -> list[list[float]]:
    batch_size = batch_size or settings.EMBED_BATCH_SIZE
    out: list[list[float]] = []
    for start in range(0, len(texts), batch_size):
        batch = texts[start:start + batch_size]
        data = post_json(
            "huggingface",
            "Embedding generation",
            _embedding_url(),
            payload={"inputs": batch, "options": {"wait_for_model": True}},
            headers=_headers(),
        )
        if not isinstance(data, list) or len(data) != len(batch) or not all(_is_vector(v) for v in data):
            raise UpstreamError("huggingface", "Embedding generation failed: unexpected response shape")
        out.extend([float(x) for x in v] for v in data)
    return out
