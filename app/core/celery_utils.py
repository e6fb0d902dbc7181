"""
Celery utility functions for reliable task queueing.

Provides helper functions to queue Celery tasks from FastAPI request handlers
without ever letting a broker problem surface to the client.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Tuple
from celery import Task
from kombu import Connection

from app.core.celery_app import celery_app  # noqa: F401  (binds shared tasks to the configured app)
from app.core.config import settings

logger = logging.getLogger(__name__)

# Thread pool for queueing tasks outside the request's event loop
_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="celery_queue")


def _queue_task_sync(task: Task, args: tuple, kwargs: dict) -> Tuple[bool, str, str]:
    """
    Queue a task over a fresh broker connection.

    Returns:
        Tuple[bool, str, str]: (success, task_id, error_message)
    """
    try:
        # Fresh Kombu connection to avoid stale connection pool issues
        with Connection(settings.REDIS_URL) as conn:
            result = task.apply_async(
                args=args,
                kwargs=kwargs,
                connection=conn,
                retry=True,
                retry_policy={
                    'max_retries': 3,
                    'interval_start': 0,
                    'interval_step': 0.2,
                    'interval_max': 0.2,
                }
            )
            return (True, result.id, "")
    except Exception as e:
        return (False, "", str(e))


def queue_task_safely(task: Task, *args, **kwargs) -> bool:
    """
    Queue a Celery task, reporting failure instead of raising.

    The queueing itself runs in a thread pool with a bounded wait
    (NOTIFICATION_QUEUE_TIMEOUT_SECONDS), so an unreachable broker costs at
    most that long and is reported as False.

    Args:
        task: The Celery task to queue
        *args: Positional arguments for the task
        **kwargs: Keyword arguments for the task

    Returns:
        bool: True if task was queued successfully, False otherwise
    """
    future = _executor.submit(_queue_task_sync, task, args, kwargs)
    try:
        success, task_id, error = future.result(timeout=settings.NOTIFICATION_QUEUE_TIMEOUT_SECONDS)
    except FutureTimeoutError:
        logger.error(f"Timed out queueing task {task.name}")
        return False

    if success:
        logger.info(f"Task {task.name} queued successfully: {task_id}")
        return True

    logger.error(f"Failed to queue task {task.name}: {error}")
    return False
