"""Celery worker running artwork analysis jobs."""

import asyncio
import logging
from celery import Celery
from celery.signals import task_failure, task_success
from app.agents.orchestrator import process_analysis_job
from app.config import get_settings
from app.database import engine

logger = logging.getLogger(__name__)

settings = get_settings()

celery_app = Celery(
    "atelie",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
)
celery_app.conf.update(
    task_default_queue=settings.analysis_queue_name,
    worker_concurrency=settings.worker_concurrency,
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    result_expires=24 * 3600,
)


async def _analyze(artwork_id: str) -> None:
    try:
        await process_analysis_job(artwork_id)
    finally:
        # Pooled connections are bound to this event loop
        await engine.dispose()


@celery_app.task(name="analysis.analyze_artwork")
def analyze_artwork(artwork_id: str) -> dict:
    """Analyze one artwork; failures propagate so Celery records them."""
    logger.info(f"Processing analysis job for artwork {artwork_id}")
    asyncio.run(_analyze(artwork_id))
    return {"artworkId": artwork_id, "status": "done"}


@task_success.connect(sender=analyze_artwork)
def on_success(sender=None, result=None, **kwargs):
    logger.info(f"Job {sender.request.id} completed")


@task_failure.connect(sender=analyze_artwork)
def on_failure(sender=None, task_id=None, exception=None, **kwargs):
    logger.error(f"Job {task_id} failed: {exception}")


def enqueue_analysis(artwork_id: str) -> str:
    """Queue an analysis job and return its job ID."""
    result = analyze_artwork.delay(artwork_id)
    logger.info(f"Enqueued analysis job {result.id} for artwork {artwork_id}")
    return result.id
