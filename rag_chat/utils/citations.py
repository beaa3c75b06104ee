import os
from typing import Any


def format_page(md: dict[str, Any] | None) -> str:
    page = (md or {}).get("page")
    if page is None or page == "":
        return "?"
    return str(page)


def format_source_label(md: dict[str, Any] | None) -> str:
    """
    Builds the label shown under a citation from chunk metadata.
    Priority:
    - "<file name>" from metadata.source (directories stripped)
    - "<title>"
    - "source"
    """
    md = md or {}
    source = (md.get("source") or "").strip()
    title = (md.get("title") or "").strip()
    if source:
        return os.path.basename(source) or source
    return title or "source"


def format_similarity(similarity: float | None) -> str:
    # 0.8734 -> "87.3%"
    if similarity is None:
        return "?"
    return f"{similarity * 100:.1f}%"


def citation_detail(source: dict[str, Any]) -> dict[str, str]:
    md = source.get("metadata") or {}
    return {
        "content": source.get("content") or "",
        "page": format_page(md),
        "source": format_source_label(md),
        "similarity": format_similarity(source.get("similarity")),
    }
