"""
Celery application configuration.

This module configures Celery to use Redis as both the message broker and result backend.
The worker process uses it to pick up notification emails queued by the API.
"""

from celery import Celery, signals
from app.core.config import settings
from app.core.logging_config import setup_logging

# Create Celery instance
celery_app = Celery(
    "job_board_worker",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL
)

# Configure Celery
celery_app.conf.update(
    # Serialization
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",

    # Timezone
    timezone="UTC",
    enable_utc=True,

    # Task behavior
    task_track_started=True,
    task_time_limit=120,  # 2 minutes max per email
    task_soft_time_limit=90,
    task_acks_late=True,  # Redeliver if a worker dies mid-send

    # Result backend
    result_expires=3600,  # Results expire after 1 hour

    # Worker behavior
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=200,
)


@signals.setup_logging.connect
def configure_worker_logging(**kwargs):
    """Use the application's log format in the worker instead of Celery's."""
    setup_logging(log_level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)


# Auto-discover tasks from app.tasks package
celery_app.autodiscover_tasks(['app'])
