import tiktoken
from rag_chat.core.config import settings

enc = tiktoken.get_encoding("cl100k_base")


def chunk_text(text: str, chunk_tokens: int | None = None, overlap: int | None = None) -> list[str]:
    chunk_tokens = chunk_tokens or settings.CHUNK_TOKENS
    overlap = settings.CHUNK_OVERLAP if overlap is None else overlap
    if overlap >= chunk_tokens:
        raise ValueError(f"overlap ({overlap}) must be smaller than chunk_tokens ({chunk_tokens})")

    tokens = enc.encode(text)
    chunks = []
    start = 0
    while start < len(tokens):
        end = min(start + chunk_tokens, len(tokens))
        chunk = enc.decode(tokens[start:end]).strip()
        if chunk:
            chunks.append(chunk)
        if end == len(tokens):
            break
        start = end - overlap
    return chunks
