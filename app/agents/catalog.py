import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode
import httpx
from app.config import get_settings
from app.schemas.artwork import ArtworkSearchQuery, ArtworkSearchResponse

logger = logging.getLogger(__name__)
settings = get_settings()


class CatalogAgent:
    """Agent responsible for reading artworks from the Algolia search index."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.index_name = settings.algolia_index_name
        self.base_url = f"https://{settings.algolia_app_id}-dsn.algolia.net/1/indexes"
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "X-Algolia-Application-Id": self.settings.algolia_app_id,
                "X-Algolia-API-Key": self.settings.algolia_api_key,
            },
            timeout=self.settings.algolia_timeout,
            transport=self.transport,
        )

    async def search(self, query: ArtworkSearchQuery) -> ArtworkSearchResponse:
        """
        Run a full-text catalog search.

        Args:
            query: Search text, facet filters and 1-based pagination

        Returns:
            Search response with 1-based page numbers
        """
        params: Dict[str, Any] = {
            "query": query.q or "",
            "page": query.page - 1,
            "hitsPerPage": query.hits_per_page,
        }

        filters = self._build_filters(query)
        if filters:
            params["filters"] = filters

        async with self._client() as client:
            response = await client.post(
                f"/{quote(self.index_name, safe='')}/query",
                json={"params": urlencode(params)},
            )
            response.raise_for_status()
            result = response.json()

        logger.info(f"Catalog search '{params['query']}' returned {result.get('nbHits', 0)} hits")

        return ArtworkSearchResponse(
            hits=result.get("hits", []),
            nb_hits=result.get("nbHits", 0),
            page=result.get("page", 0) + 1,
            nb_pages=result.get("nbPages", 0),
            hits_per_page=result.get("hitsPerPage", query.hits_per_page),
        )

    def _build_filters(self, query: ArtworkSearchQuery) -> str:
        """Combine facet filters with AND."""
        filters = []
        if query.artist:
            filters.append(f'studioName:"{query.artist}"')
        if query.availability:
            filters.append(f'status:"{query.availability}"')
        if query.technique:
            filters.append(f'techniques:"{query.technique}"')
        return " AND ".join(filters)

    async def get_artwork(self, artwork_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a single artwork by object ID.

        Returns:
            The stored object, or None if the index has no such object
        """
        async with self._client() as client:
            response = await client.get(
                f"/{quote(self.index_name, safe='')}/{quote(artwork_id, safe='')}"
            )
            if response.status_code == 404:
                logger.info(f"Artwork {artwork_id} not found in catalog")
                return None
            response.raise_for_status()
            return response.json()

    async def get_artworks(self, artwork_ids: List[str]) -> List[Dict[str, Any]]:
        """
        Fetch several artworks in one request.

        Objects missing from the index are dropped from the result.
        """
        if not artwork_ids:
            return []

        requests = [
            {"indexName": self.index_name, "objectID": artwork_id}
            for artwork_id in artwork_ids
        ]

        async with self._client() as client:
            response = await client.post("/*/objects", json={"requests": requests})
            response.raise_for_status()
            results = response.json().get("results", [])

        artworks = [r for r in results if r]
        logger.info(f"Fetched {len(artworks)}/{len(artwork_ids)} artworks from catalog")
        return artworks
