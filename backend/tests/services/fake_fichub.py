"""Fake FicHub + HTTP helpers for route tests.

Invariants:
    - FakeFicSource knows exactly one fic (Nemesis); every other URL fails
      with UpstreamError, like the real lookup answering 404
    - Every meta() call is recorded, so tests can count upstream traffic
"""

from http.cookies import SimpleCookie

from ficai_signals.api.session_cookie import SESSION_COOKIE_NAME
from ficai_signals.core.domain_types import FicId, FicMeta
from ficai_signals.core.errors import ErrorContext, UpstreamError

NEMESIS_URL = "https://forums.spacebattles.com/threads/nemesis-worm-au.747148/"
NEMESIS = FicMeta(id=FicId("NtePoQrV"), title="Nemesis", source=NEMESIS_URL)


class FakeFicSource:
    """In-memory stand-in for the fic metadata lookup."""

    def __init__(self):
        self.known: dict[str, FicMeta] = {NEMESIS_URL: NEMESIS}
        self.calls: list[str] = []

    async def meta(self, url: str) -> FicMeta:
        self.calls.append(url)
        if url not in self.known:
            raise UpstreamError("status_404", context=ErrorContext(url=url))
        return self.known[url]


def session_token(response) -> str:
    """Extract the session cookie value from a Set-Cookie header."""
    cookie = SimpleCookie()
    cookie.load(response.headers["set-cookie"])
    return cookie[SESSION_COOKIE_NAME].value


def auth(token: str) -> dict:
    """Request headers carrying a session cookie."""
    return {"Cookie": f"{SESSION_COOKIE_NAME}={token}"}
