from fastapi import Request
import logging
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("app")

# Static assets are only logged at debug level
QUIET_PREFIXES = ("/ui/", "/uploads/")

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = uuid.uuid4().hex[:8]
        start_time = time.time()

        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        log = logger.debug if request.url.path.startswith(QUIET_PREFIXES) else logger.info

        log(f"[{request_id}] {request.method} {path}")
        response = await call_next(request)

        process_time = time.time() - start_time
        log(f"[{request_id}] {response.status_code} in {process_time:.4f}s")
        response.headers["X-Request-ID"] = request_id

        return response
