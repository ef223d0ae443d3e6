from fastapi import Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send
from typing import Iterable

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}

# Public functions that answer their own pre-flights and set CORS_HEADERS on every response
FUNCTION_PATHS = ("/v1/send-contact-email", "/v1/fetch-google-reviews")


def preflight_response() -> Response:
    """Answer a cross-origin pre-flight check before any business logic runs."""
    return Response(status_code=200, headers=CORS_HEADERS)


class SiteCORSMiddleware(CORSMiddleware):
    """
    CORSMiddleware for the data routes.

    Requests to ``exempt_paths`` pass straight through, so browser
    pre-flights to the public functions reach their own OPTIONS handlers.
    """

    def __init__(self, app: ASGIApp, exempt_paths: Iterable[str] = FUNCTION_PATHS, **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.exempt_paths = frozenset(exempt_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"] in self.exempt_paths:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
