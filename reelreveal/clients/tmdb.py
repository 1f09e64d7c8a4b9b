from __future__ import annotations
from typing import List, Dict, Any, Optional
import logging
import httpx
from ..config import Settings
from ..exceptions import ServerMisconfiguredError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

class TMDBClient:
    """
    Minimal typed adapter for TMDB (v3 key as query param).
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.base: str = settings.movies_api_base.rstrip("/")
        self.timeout: httpx.Timeout = httpx.Timeout(settings.request_timeout_s)
        self.v3_key: str = (settings.tmdb_api_key or "").strip()
        self.transport: Optional[httpx.AsyncBaseTransport] = transport

    def _headers(self) -> Dict[str, str]:
        """
        Common headers for all requests.
        """
        return {"Accept": "application/json"}

    def _params(self) -> Dict[str, str]:
        """
        Authentication parameters for v3 API key.
        """
        if not self.v3_key:
            logger.error("TMDB_API_KEY missing")
            raise ServerMisconfiguredError("Server misconfigured: TMDB_API_KEY missing")
        return {"api_key": self.v3_key}

    async def _get(self, path: str, params: Dict[str, Any], operation: str) -> Any:
        """
        GET a TMDB path and decode its JSON body.
        Non-2xx and transport failures become UpstreamUnavailableError (502).
        """
        params = {**self._params(), **params}
        error: str = f"TMDB {operation} failed"
        async with httpx.AsyncClient(
            timeout=self.timeout, headers=self._headers(), transport=self.transport
        ) as client:
            try:
                r: httpx.Response = await client.get(f"{self.base}{path}", params=params)
            except httpx.HTTPError as he:  # network / timeout / protocol
                logger.error("TMDB %s error: %s", operation, he, extra={"operation": f"tmdb.{operation}"})
                raise UpstreamUnavailableError(error, message=str(he) or type(he).__name__) from he

            if not r.is_success:
                body: str = r.text
                logger.error(
                    "TMDB %s error: %s",
                    operation,
                    r.status_code,
                    extra={"operation": f"tmdb.{operation}", "upstream_status": r.status_code, "upstream_body": body[:300]},
                )
                raise UpstreamUnavailableError(error, upstream_status=r.status_code, details=body or "No response body")

            try:
                return r.json()
            except ValueError as ve:
                raise UpstreamUnavailableError(error, message=f"Invalid JSON from TMDB: {ve}") from ve

    async def search_movies(self, query: str) -> List[Dict[str, Any]]:
        """
        Title search; results keep TMDB's relevance ordering.
        """
        payload: Dict[str, Any] = await self._get("/search/movie", {"query": query}, "search")
        results = payload.get("results") if isinstance(payload, dict) else None
        return results if isinstance(results, list) else []

    async def get_movie_details(self, movie_id: int) -> Dict[str, Any]:
        """Fetch a movie's details with its cast and crew embedded under `credits`."""
        return await self._get(f"/movie/{movie_id}", {"append_to_response": "credits"}, "details")
