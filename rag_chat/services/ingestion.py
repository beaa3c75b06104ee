import re
import unicodedata

from rag_chat.core.config import settings
from rag_chat.core.errors import ConfigurationError
from rag_chat.services.chunker import chunk_text
from rag_chat.services.embeddings import embed_texts
from rag_chat.services.extractor import extract_pdf_pages
from rag_chat.services.vector_store import insert_chunks
from rag_chat.utils.logger import get_logger

logger = get_logger(__name__)

_whitespace_re = re.compile(r"[ \t]+")
_multi_newline_re = re.compile(r"\n{3,}")

INSERT_BATCH = 100


def normalize_text(text: str) -> str:
    if not text:
        return ""
    text = unicodedata.normalize("NFKC", text)

    # normalize line endings first so the hyphen fix sees "\n"
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    # "exam-\nple" -> "example"
    text = re.sub(r"(\w)-\n(\w)", r"\1\2", text)

    text = _whitespace_re.sub(" ", text)
    text = _multi_newline_re.sub("\n\n", text)
    return text.strip()


def build_chunks(pages: list[dict], source: str, chunk_tokens: int | None = None, overlap: int | None = None) -> list[dict]:
    """
    pages: [{"page": n, "text": ...}]
    Chunks never span pages so each one carries a single page number.
    """
    out = []
    for p in pages:
        for text in chunk_text(normalize_text(p["text"]), chunk_tokens=chunk_tokens, overlap=overlap):
            out.append({
                "content": text,
                "metadata": {"source": source, "page": p["page"], "chunk_index": len(out)},
            })
    return out


def ingest_pdf(
    file_bytes: bytes,
    *,
    source: str | None = None,
    chunk_tokens: int | None = None,
    overlap: int | None = None,
    dry_run: bool = False,
) -> int:
    """Returns the number of chunks built (and inserted unless dry_run)."""
    source = source or settings.SOURCE_FILTER
    pages = extract_pdf_pages(file_bytes)
    chunks = build_chunks(pages, source, chunk_tokens=chunk_tokens, overlap=overlap)
    logger.info("Built %d chunks from %d pages of %s", len(chunks), len(pages), source)
    if dry_run or not chunks:
        return len(chunks)

    missing = [m for m in settings.missing_credentials() if m != "GEMINI_API_KEY"]
    if missing:
        raise ConfigurationError(missing)

    embeddings = embed_texts([c["content"] for c in chunks])
    rows = [{**c, "embedding": e} for c, e in zip(chunks, embeddings)]
    for start in range(0, len(rows), INSERT_BATCH):
        insert_chunks(rows[start:start + INSERT_BATCH])
        logger.debug("Inserted rows %d-%d", start, min(start + INSERT_BATCH, len(rows)) - 1)
    return len(rows)
