from rag_chat.core.config import settings
from rag_chat.core.errors import ConfigurationError, InvalidInputError
from rag_chat.schemas.chat import ChatOut
from rag_chat.services.embeddings import embed_query
from rag_chat.services.prompts import build_prompt
from rag_chat.services.upstream import post_json
from rag_chat.services.vector_store import filter_by_similarity, query_vectors
from rag_chat.utils.logger import get_logger

logger = get_logger(__name__)

FALLBACK_ANSWER = "Error generating response from LLM."


def extract_answer(data) -> str:
    # candidates[0].content.parts[0].text, any missing level falls back
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return FALLBACK_ANSWER
    if not isinstance(text, str) or not text:
        return FALLBACK_ANSWER
    return text


def generate_answer(system_prompt: str, prompt: str) -> str:
    payload = {
        "contents": [{"parts": [{"text": prompt}]}],
        "systemInstruction": {"parts": [{"text": system_prompt}]},
        "generationConfig": {"temperature": settings.TEMPERATURE},
    }
    data = post_json(
        "gemini",
        "Gemini generation",
        f"{settings.GEMINI_BASE_URL.rstrip('/')}/models/{settings.GEMINI_MODEL}:generateContent",
        payload=payload,
        headers={"Content-Type": "application/json"},
        params={"key": settings.GEMINI_API_KEY},
    )
    return extract_answer(data)


def answer_question(question: str) -> ChatOut:
    """
    embed -> retrieve -> threshold filter -> prompt -> generate.
    Stops at the first failing step; nothing after it is called.
    """
    if not isinstance(question, str) or not question.strip():
        raise InvalidInputError()

    missing = settings.missing_credentials()
    if missing:
        raise ConfigurationError(missing)

    logger.info("Generating embedding for query...")
    embedding = embed_query(question)

    logger.info("Retrieving similar chunks...")
    chunks = query_vectors(embedding)
    sources = filter_by_similarity(chunks)
    logger.info(
        "Kept %d of %d chunks above similarity %.2f",
        len(sources), len(chunks), settings.SIMILARITY_THRESHOLD,
    )

    system_prompt, prompt = build_prompt(question, sources)

    logger.info("Generating answer with Gemini...")
    answer = generate_answer(system_prompt, prompt)

    return ChatOut(answer=answer, sources=sources)
