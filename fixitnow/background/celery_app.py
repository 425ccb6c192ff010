"""
Celery application configuration and setup.
"""

from celery import Celery

from fixitnow.config.settings import settings

celery_app = Celery(
    "fixitnow",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["fixitnow.background.tasks.invoices"],
)

celery_app.conf.update(
    # Task routing
    task_routes={
        "mark_overdue_invoices_task": {"queue": "maintenance"},
    },
    # Worker configuration
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,  # Restart worker after 100 tasks
    worker_hijack_root_logger=False,
    # Task configuration
    task_always_eager=False,  # Set to True for testing
    task_eager_propagates=True,
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    result_expires=3600,  # 1 hour
    task_default_queue="default",
    # Beat scheduler configuration
    beat_schedule={
        "mark-overdue-invoices": {
            "task": "mark_overdue_invoices_task",
            "schedule": float(settings.OVERDUE_INVOICE_CHECK_INTERVAL_SECONDS),
            "options": {"queue": "maintenance"},
        },
    },
    # Task time limits
    task_soft_time_limit=settings.CELERY_TASK_SOFT_TIME_LIMIT,
    task_time_limit=settings.CELERY_TASK_TIME_LIMIT,
    worker_send_task_events=True,
)


if __name__ == "__main__":
    celery_app.start()
