from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional
from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, settings
from .dependencies import get_insight_service, get_search_service, get_settings
from .exceptions import (
    NotFoundError,
    ReelRevealError,
    global_exception_handler,
    http_exception_handler,
    reelreveal_exception_handler,
    validation_exception_handler,
)
from .logging_config import setup_logging
from .middleware import RequestTrackingMiddleware
from .models import HealthResponse, InsightRequest, InsightResponse
from .services.insight_service import InsightService
from .services.search_service import FilmSearchService

setup_logging(settings.log_level)

app: FastAPI = FastAPI(title=settings.app_name, version="0.1.0")

app.add_middleware(RequestTrackingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ReelRevealError, reelreveal_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)


@app.get("/api", response_model=HealthResponse)
def health() -> HealthResponse:
    """Simple liveness probe."""
    return HealthResponse(message="ReelReveal API is running!")


@app.get("/api/search")
@app.get("/api/search/{query:path}")
async def search_film(
    query: str = "",
    service: FilmSearchService = Depends(get_search_service),
) -> Dict[str, Any]:
    """
    Best TMDB match for `query`, with details and credits.
    """
    return await service.find_film(query)


@app.post("/api/generate-insights", response_model=InsightResponse)
async def generate_insights(
    payload: Optional[InsightRequest] = None,
    service: InsightService = Depends(get_insight_service),
) -> InsightResponse:
    """
    Generated trivia and context for a film, one sentence per paragraph.
    """
    return await service.generate(payload or InsightRequest())


@app.get("/{full_path:path}", include_in_schema=False)
async def spa(full_path: str, cfg: Settings = Depends(get_settings)) -> FileResponse:
    """
    Static assets from STATIC_DIR, falling back to the SPA entry document.
    """
    if full_path == "api" or full_path.startswith("api/"):
        raise NotFoundError("Not found")

    root: Path = Path(cfg.static_dir).resolve()
    if full_path:
        candidate: Path = (root / full_path).resolve()
        if candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate)

    index: Path = root / "index.html"
    if index.is_file():
        return FileResponse(index)
    raise NotFoundError("Not found")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("reelreveal.main:app", host=settings.host, port=settings.port)
