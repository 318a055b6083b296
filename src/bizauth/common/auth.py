"""Signed-URL authentication middleware."""

from __future__ import annotations

from collections.abc import Mapping

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from bizauth.common.errors import BizAuthError, ErrorCode, error_response
from bizauth.common.settings import Settings
from bizauth.urlsign.authenticator import authenticate
from bizauth.urlsign.signer import CLIENT_PARAM


def raw_request_url(request: Request) -> str:
    """Rebuild the request URL with path and query exactly as sent."""
    raw_path = request.scope.get("raw_path")
    # Some servers leave the query on raw_path.
    path = raw_path.split(b"?", 1)[0].decode("latin-1") if raw_path else request.url.path
    query = request.scope.get("query_string", b"").decode("latin-1")
    host = request.headers.get("host") or request.url.netloc
    return f"{request.url.scheme}://{host}{path}?{query}"


class SignedUrlAuthMiddleware(BaseHTTPMiddleware):
    """Reject requests whose URL is not signed by a registered client."""

    def __init__(self, app: ASGIApp, repository: Mapping[str, str], settings: Settings) -> None:
        super().__init__(app)
        self._repository = repository
        self._exempt_paths = set(settings.auth_exempt_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self._exempt_paths:
            return await call_next(request)

        try:
            _, params = authenticate(self._repository, raw_request_url(request))
        except BizAuthError:
            # Same answer for every failure so callers learn nothing about
            # which check rejected them.
            return error_response(ErrorCode.UNAUTHORIZED, "Invalid request signature", 401)

        client = params[CLIENT_PARAM][0]
        request.state.client = client
        structlog.contextvars.bind_contextvars(client=client)
        try:
            return await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("client")
