from typing import Optional
import httpx
from fastapi import APIRouter, Depends, HTTPException, Query
from app.agents.catalog import CatalogAgent
from app.api.deps import get_catalog
from app.schemas.artwork import ArtworkSearchQuery, ArtworkSearchResponse
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/search", response_model=ArtworkSearchResponse)
async def search_artworks(
    q: Optional[str] = Query(None, description="Full-text query"),
    artist: Optional[str] = Query(None, description="Filter by studio name"),
    availability: Optional[str] = Query(None, description="Filter by availability status"),
    technique: Optional[str] = Query(None, description="Filter by technique"),
    page: int = Query(1, ge=1, description="1-based page number"),
    hits_per_page: int = Query(20, ge=1, le=100, alias="hitsPerPage", description="Results per page"),
    catalog: CatalogAgent = Depends(get_catalog)
):
    """
    Search the artwork catalog with optional facet filters.
    """
    query = ArtworkSearchQuery(
        q=q,
        artist=artist,
        availability=availability,
        technique=technique,
        page=page,
        hits_per_page=hits_per_page,
    )
    return await catalog.search(query)


@router.get("/{artwork_id}")
async def get_artwork(
    artwork_id: str,
    catalog: CatalogAgent = Depends(get_catalog)
):
    """
    Get a single artwork by its catalog ID.
    """
    try:
        artwork = await catalog.get_artwork(artwork_id)
    except httpx.HTTPError as e:
        logger.error(f"Failed to fetch artwork {artwork_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch artwork")

    if not artwork:
        raise HTTPException(status_code=404, detail="Artwork not found")

    return artwork
