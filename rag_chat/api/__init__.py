from fastapi import APIRouter
from rag_chat.api.routes import chat

router = APIRouter()
router.include_router(chat.router)
