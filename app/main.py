from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy.exc import SQLAlchemyError
from pathlib import Path
import logging

from app.core.config import settings
from app.core.exceptions import ForumError, StorageError, Unauthenticated
from app.core.templates import render_error
from app.db.init_db import create_all_tables
from app.middleware.request_logging import RequestLoggingMiddleware
from app.middleware.auth_logging import AuthLoggingMiddleware
from app.modules.auth.api.router import router as auth_router
from app.modules.posts.api.router import router as posts_router
from app.modules.posts.comments.api.router import router as comments_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("app")

# Initialize the FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
    description="Discussion forum with posts, comments, categories and likes",
    version=settings.VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url=None,
)

@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting server in {settings.ENVIRONMENT} mode")
    create_all_tables()

# Error pages

@app.exception_handler(Unauthenticated)
async def unauthenticated_handler(request: Request, exc: Unauthenticated):
    """Send page views to the login form; refuse form posts outright."""
    if request.method == "GET":
        return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)
    return render_error(request, exc.status_code, exc.message)

@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage error on {request.method} {request.url.path}: {exc.message}")
    return render_error(request, exc.status_code, "Internal Server Error")

@app.exception_handler(ForumError)
async def forum_error_handler(request: Request, exc: ForumError):
    return render_error(request, exc.status_code, exc.message)

@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return render_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Malformed request on {request.url.path}: {exc.errors()}")
    return render_error(request, status.HTTP_400_BAD_REQUEST, "Bad Request")

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return render_error(request, exc.status_code, str(exc.detail))

# Custom middleware for request logging
class LogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        if response.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed with {response.status_code}")
        return response

# Add middleware
app.add_middleware(LogMiddleware)
app.add_middleware(AuthLoggingMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# Create required directories
for directory in [settings.UPLOAD_DIRECTORY, settings.UI_DIRECTORY]:
    Path(directory).mkdir(parents=True, exist_ok=True)

# Static assets and uploaded images
app.mount("/ui", StaticFiles(directory=settings.UI_DIRECTORY), name="ui")
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIRECTORY), name="uploads")

# Register routers
app.include_router(auth_router, tags=["authentication"])
app.include_router(posts_router, tags=["posts"])
app.include_router(comments_router, tags=["comments"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8080, reload=True)
