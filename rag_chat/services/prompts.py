"""
Prompt templates for the generation step.

Two shapes: a grounded prompt that carries a numbered CONTEXT block, and an
ungrounded one used when no retrieved chunk clears the similarity threshold.
"""

from rag_chat.schemas.chat import Source

GROUNDED_SYSTEM_PROMPT = (
    "You are a helpful RAG assistant for a nutrition document. "
    "Answer using the CONTEXT provided below. "
    "If the answer is not in the context, say that you couldn't find it in the provided document. "
    "Cite sources ONLY with bracket numbers such as [1] or [2], placed right after the claim they support. "
    "Never write page numbers or phrases like '(Page 12)' in your answer; the citation numbers already point to the pages."
)

UNGROUNDED_SYSTEM_PROMPT = (
    "You are a friendly nutrition assistant. "
    "No passage from the reference document matched this question, so answer from general knowledge "
    "in a warm, conversational tone. Keep it short and do not use citation numbers."
)


def format_context(sources: list[Source]) -> str:
    blocks = []
    for i, s in enumerate(sources, start=1):
        page = s.metadata.page if s.metadata.page is not None else "?"
        blocks.append(f"[{i}] (Page {page}) {s.content}")
    return "\n\n".join(blocks)


def build_grounded_prompt(question: str, sources: list[Source]) -> str:
    return f"QUESTION: {question}\n\nCONTEXT:\n{format_context(sources)}"


def build_ungrounded_prompt(question: str) -> str:
    return f"QUESTION: {question}"


def build_prompt(question: str, sources: list[Source]) -> tuple[str, str]:
    """Returns (system_instruction, user_prompt)."""
    if sources:
        return GROUNDED_SYSTEM_PROMPT, build_grounded_prompt(question, sources)
    return UNGROUNDED_SYSTEM_PROMPT, build_ungrounded_prompt(question)
