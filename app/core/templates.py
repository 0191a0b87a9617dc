from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from app.core.config import settings

templates = Jinja2Templates(directory=settings.TEMPLATES_DIRECTORY)

def render(request: Request, name: str, context: Optional[Dict[str, Any]] = None, status_code: int = 200):
    """Render a page template with the request in its context"""
    return templates.TemplateResponse(request, name, context or {}, status_code=status_code)

def render_error(request: Request, status_code: int, message: str):
    return render(
        request,
        "error.html",
        {"status_code": status_code, "status_text": message},
        status_code=status_code,
    )
