import requests

from rag_chat.core.config import settings
from rag_chat.core.errors import UpstreamError
from rag_chat.utils.logger import get_logger

logger = get_logger(__name__)


def post_json(provider: str, label: str, url: str, *, payload, headers: dict | None = None, params: dict | None = None):
    """
    POSTs `payload` as JSON and returns the decoded body.

    Any transport failure, non-2xx status or non-JSON body becomes an
    UpstreamError whose message starts with `label`
    (e.g. "Embedding generation failed: 503").
    """
    try:
        r = requests.post(
            url,
            json=payload,
            headers=headers,
            params=params,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        )
    except requests.Timeout:
        raise UpstreamError(provider, f"{label} failed: timeout")
    except requests.RequestException as exc:
        raise UpstreamError(provider, f"{label} failed: {exc.__class__.__name__}")

    if not r.ok:
        logger.error("%s error %s: %s", provider, r.status_code, r.text[:500])
        raise UpstreamError(provider, f"{label} failed: {r.status_code}", status=r.status_code)

    if not r.content:
        return None
    try:
        return r.json()
    except ValueError:
        raise UpstreamError(provider, f"{label} failed: invalid JSON body", status=r.status_code)
