from fastapi import Request
import logging
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings

logger = logging.getLogger("app")

PROTECTED_PATHS = (
    "/create_post", "/like", "/dislike", "/create_comment",
    "/like_comment", "/dislike_comment", "/my_posts", "/liked_posts",
)

class AuthLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        has_session = bool(request.cookies.get(settings.SESSION_COOKIE_NAME))

        if not has_session and path in PROTECTED_PATHS:
            logger.warning(f"Protected endpoint {path} accessed without a session cookie")

        response = await call_next(request)

        # Log auth-related status codes
        if response.status_code in [401, 403]:
            logger.warning(f"Auth error: {response.status_code} on {path}")

        return response
