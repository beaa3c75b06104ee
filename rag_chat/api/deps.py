import secrets

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from rag_chat.core.config import settings
from rag_chat.core.errors import AuthError

# the header is optional unless API_BEARER_TOKEN is configured
bearer = HTTPBearer(auto_error=False)


def verify_bearer(creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> None:
    expected = settings.API_BEARER_TOKEN
    if not expected:
        return
    if creds is None or not secrets.compare_digest(creds.credentials, expected):
        raise AuthError()
