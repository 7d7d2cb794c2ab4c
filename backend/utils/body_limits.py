"""
Request body ceilings for upload endpoints.

Multipart bodies are parsed and spooled by the framework before a route
runs, so the size ceiling of an upload is enforced on the raw ASGI stream.
A request declaring a larger Content-Length is refused before any of its body
is read; a body without one is counted as it arrives and cut off once it
passes the ceiling.
"""

from typing import Mapping, Optional

from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from config.settings import AppConfig
from constants import UploadKind, UploadLimits
from exceptions import PayloadTooLargeError
from utils.error_handlers import to_http_exception


def upload_body_limits(config: AppConfig, prefix: str = "/api") -> dict:
    """
    Upload ceiling per endpoint path prefix.

    Returns:
        Mapping of "{prefix}/{route_name}/" to the kind's max upload bytes
    """
    return {
        f"{prefix}/{kind.route_name}/": config.max_bytes_for(kind)
        for kind in UploadKind
    }


class UploadBodyLimitMiddleware:
    """
    ASGI middleware bounding the request body of upload endpoints.

    Args:
        app: Wrapped ASGI application
        limits: Max upload bytes per path prefix
        overhead: Bytes allowed on top of the upload for multipart framing
    """

    def __init__(
        self,
        app: ASGIApp,
        limits: Mapping[str, int],
        overhead: int = UploadLimits.MULTIPART_OVERHEAD_BYTES,
    ):
        self.app = app
        self.limits = dict(limits)
        self.overhead = overhead

    def _limit_for(self, path: str) -> Optional[int]:
        for prefix, limit in self.limits.items():
            if path.startswith(prefix):
                return limit
        return None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        max_bytes = self._limit_for(scope["path"]) if scope["type"] == "http" else None
        if max_bytes is None:
            await self.app(scope, receive, send)
            return

        body_limit = max_bytes + self.overhead
        operation = f"Upload to {scope['path']}"

        declared = Headers(scope=scope).get("content-length")
        if declared is not None and declared.isdigit() and int(declared) > body_limit:
            error = to_http_exception(operation, PayloadTooLargeError(max_bytes))
            response = JSONResponse({"detail": error.detail}, status_code=error.status_code)
            await response(scope, receive, send)
            return

        received = 0

        async def bounded_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > body_limit:
                    # FastAPI passes an HTTPException raised during body parsing through unchanged
                    raise to_http_exception(operation, PayloadTooLargeError(max_bytes))
            return message

        await self.app(scope, bounded_receive, send)
