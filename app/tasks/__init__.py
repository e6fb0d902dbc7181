"""
Celery tasks package.

Tasks are organized by domain:
- email_tasks: Notification emails (new application, status change, welcome)
"""

from app.tasks import email_tasks

__all__ = ["email_tasks"]
