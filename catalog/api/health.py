from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/ping",
    response_class=PlainTextResponse,
    summary="Ping",
    description="Liveness probe answering `pong`."
)
def ping():
    return "pong"


@router.get(
    "/health",
    summary="Health check",
    description="Report service status and the configured product store."
)
def health_check(request: Request):
    """Simple health check."""
    return {
        "status": "healthy",
        "store": request.app.state.settings.STORE_BACKEND,
    }
