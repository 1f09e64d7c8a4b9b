from __future__ import annotations
from typing import Any, Dict, List, Optional, Protocol
import logging
from ..exceptions import BadRequestError, NotFoundError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

class FilmCatalog(Protocol):
    """Search and details lookups of a film metadata provider."""

    async def search_movies(self, query: str) -> List[Dict[str, Any]]:
        ...

    async def get_movie_details(self, movie_id: int) -> Dict[str, Any]:
        ...

class FilmSearchService:
    """
    Resolves a free-text query to the full record of its best match.
    """

    def __init__(self, catalog: FilmCatalog) -> None:
        self.catalog: FilmCatalog = catalog

    async def find_film(self, query: Optional[str]) -> Dict[str, Any]:
        """
        Search, keep the provider's first result and return its details
        (with credits) exactly as the provider sent them.
        """
        q: str = (query or "").strip()
        if not q:
            raise BadRequestError("Search query is required")

        results: List[Dict[str, Any]] = await self.catalog.search_movies(q)
        if not results:
            logger.info("No films found for %r", q)
            raise NotFoundError("No films found")

        film: Any = results[0]
        movie_id = film.get("id") if isinstance(film, dict) else None
        if movie_id is None:
            raise UpstreamUnavailableError("TMDB search failed", message="First search result has no id")
        return await self.catalog.get_movie_details(movie_id)
