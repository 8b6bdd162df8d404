"""FicHub Metadata Client: resolves a story URL to its canonical fic identity.

Invariants:
    - One attempt per call, no retry (callers retry at the boundary)
    - The whole call (connect + response + body) is bounded by timeout_seconds
    - Every failure mode (timeout, transport error, non-200, malformed body)
      becomes UpstreamError; upstream text never reaches the caller
    - Success is a 200 JSON body {id, title, source}

Design Decisions:
    - One shared httpx.AsyncClient per process (connection reuse), created on
      startup and closed on shutdown
    - asyncio.wait_for around the request: httpx timeouts are per phase, the
      request deadline needs a single total bound
    - transport parameter lets tests plug in httpx.MockTransport
"""

import asyncio
import logging
import time

import httpx

from ficai_signals.core.domain_types import FicId, FicMeta
from ficai_signals.core.errors import ErrorContext, UpstreamError

logger = logging.getLogger(__name__)


class FicHubClient:
    """Fic metadata lookup over HTTP with a hard time bound and error mapping."""

    META_PATH = "/api/v0/meta"

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def meta(self, url: str) -> FicMeta:
        """Look up one URL. Raises UpstreamError on any failure."""
        context = ErrorContext(url=url)
        started = time.monotonic()
        try:
            response = await asyncio.wait_for(
                self.client.get(self.META_PATH, params={"q": url}),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Fic lookup timed out",
                extra={"url": url, "elapsed_ms": _elapsed_ms(started)},
            )
            raise UpstreamError("timeout", context=context)
        except httpx.HTTPError as e:
            logger.warning(
                f"Fic lookup transport error: {type(e).__name__}",
                extra={"url": url, "elapsed_ms": _elapsed_ms(started)},
            )
            raise UpstreamError("transport_error", context=context)

        if response.status_code != httpx.codes.OK:
            logger.info(
                f"Fic lookup returned status {response.status_code}",
                extra={"url": url, "elapsed_ms": _elapsed_ms(started)},
            )
            raise UpstreamError(f"status_{response.status_code}", context=context)

        meta = _parse_meta(response)
        if meta is None:
            logger.warning("Fic lookup returned a malformed body", extra={"url": url})
            raise UpstreamError("malformed_body", context=context)
        logger.info(
            "Fic resolved",
            extra={"url": url, "fic_id": meta.id, "elapsed_ms": _elapsed_ms(started)},
        )
        return meta

    async def aclose(self) -> None:
        await self.client.aclose()


def _parse_meta(response: httpx.Response) -> FicMeta | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    fic_id, title, source = body.get("id"), body.get("title"), body.get("source")
    if not all(isinstance(v, str) and v for v in (fic_id, title, source)):
        return None
    return FicMeta(id=FicId(fic_id), title=title, source=source)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


# Singleton (initialized on startup)
fichub_client: FicHubClient | None = None


def init_fichub(base_url: str, timeout_seconds: float) -> None:
    global fichub_client
    fichub_client = FicHubClient(base_url, timeout_seconds=timeout_seconds)


async def close_fichub() -> None:
    global fichub_client
    if fichub_client:
        await fichub_client.aclose()
        fichub_client = None


def get_fic_meta_source() -> FicHubClient:
    """FastAPI dependency for the fic metadata lookup."""
    if not fichub_client:
        raise RuntimeError("Fic metadata client not initialized")
    return fichub_client
