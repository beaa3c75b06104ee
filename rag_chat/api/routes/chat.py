from fastapi import APIRouter, Depends

from rag_chat.api.deps import verify_bearer
from rag_chat.core.errors import RagChatError
from rag_chat.schemas.chat import ChatIn, ChatOut, ErrorOut
from rag_chat.services.rag import answer_question
from rag_chat.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["chat"])


@router.post(
    "/rag-chat",
    response_model=ChatOut,
    responses={400: {"model": ErrorOut}, 401: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
def rag_chat(payload: ChatIn, _auth: None = Depends(verify_bearer)):
    # sync handler: the upstream calls block, FastAPI runs this in its threadpool
    try:
        return answer_question(payload.message)
    except RagChatError:
        raise
    except Exception as exc:
        logger.exception("RAG chat error")
        raise RagChatError(str(exc) or "Internal server error") from exc
