"""FastAPI routes for the server status page and health check."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from controllers.status_controller import health_status, render_status_page

router = APIRouter()


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def status_page(request: Request):
    return HTMLResponse(render_status_page(request))


@router.get("/health")
async def health(request: Request):
    """Report connected sessions, lifetime visitors and chat log size."""
    return health_status(request)
