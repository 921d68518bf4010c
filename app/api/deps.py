from typing import Callable
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.agents.catalog import CatalogAgent
from app.agents.criteria import CriteriaAgent
from app.agents.storage import AnalysisStore
from app.database import get_db
from app.worker import enqueue_analysis


def get_analysis_store(db: AsyncSession = Depends(get_db)) -> AnalysisStore:
    return AnalysisStore(db)


def get_catalog() -> CatalogAgent:
    return CatalogAgent()


def get_criteria_agent() -> CriteriaAgent:
    return CriteriaAgent()


def get_job_queue() -> Callable[[str], str]:
    """Return the function that enqueues an analysis job and yields its job ID."""
    return enqueue_analysis
