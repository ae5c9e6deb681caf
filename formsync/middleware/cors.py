"""CORS middleware configuration"""
from fastapi.middleware.cors import CORSMiddleware
from starlette.types import Receive, Scope, Send
from typing import Iterable
from formsync.config import get_settings

settings = get_settings()

# Sent on every submit endpoint response, preflight included
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


class PassthroughCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that leaves some paths to their own CORS handling"""

    def __init__(self, app, passthrough_paths: Iterable[str] = (), **kwargs):
        super().__init__(app, **kwargs)
        self.passthrough_paths = frozenset(passthrough_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"] in self.passthrough_paths:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


def setup_cors(app, passthrough_paths: Iterable[str] = ()):
    """
    Configure CORS middleware for the application

    Args:
        app: FastAPI application instance
        passthrough_paths: Paths whose routes answer preflight themselves
    """
    app.add_middleware(
        PassthroughCORSMiddleware,
        passthrough_paths=tuple(passthrough_paths),
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
