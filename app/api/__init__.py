from fastapi import APIRouter
from app.api import artworks, analysis, search

api_router = APIRouter(prefix="/api")

api_router.include_router(artworks.router, prefix="/artworks", tags=["artworks"])
api_router.include_router(analysis.router, prefix="/analysis", tags=["analysis"])
api_router.include_router(search.router, prefix="/search", tags=["search"])

__all__ = ["api_router"]
