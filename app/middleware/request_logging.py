import logging
import time

from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("app.access")

class RequestLoggingMiddleware:
    """
    Access log written as plain ASGI middleware.

    `receive` is handed to the app untouched so endpoints still see the
    client's http.disconnect; only `send` is wrapped to capture the status.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.time()
        status_code = 500

        async def send_with_status(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_with_status)
        finally:
            # Calculate processing time
            process_time = time.time() - start_time
            self._log(Request(scope), status_code, process_time)

    @staticmethod
    def _log(request: Request, status_code: int, process_time: float) -> None:
        # Get request details
        ip = request.headers.get("x-forwarded-for", "").split(",")[0].strip()
        if not ip and request.client:
            ip = request.client.host
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        proto = f"HTTP/{request.scope.get('http_version', '1.1')}"

        logger.info(
            f"access ip={ip} method={request.method} url={url} proto={proto} "
            f"status={status_code} duration={process_time:.4f}s"
        )
