from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rag_chat.core.config import settings
from rag_chat.core.errors import InvalidInputError, RagChatError
from rag_chat.api import router as api_router
from rag_chat.utils.logger import get_logger

logger = get_logger(__name__)

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

app.include_router(api_router)


@app.exception_handler(RagChatError)
async def rag_chat_error_handler(request: Request, exc: RagChatError):
    if exc.status_code >= 500:
        logger.error("%s error on %s: %s", exc.kind, request.url.path, exc.message)
    else:
        logger.warning("%s error on %s: %s", exc.kind, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return await rag_chat_error_handler(request, InvalidInputError())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Internal server error"})


@app.get("/health")
def health():
    return {"status": "ok"}
