from celery import Celery

from ebee.core.config import settings

celery_app = Celery(
    "ebee",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["ebee.tasks.notification_tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # Tests never reach a broker
    task_always_eager=settings.ENVIRONMENT == "testing",
    task_eager_propagates=True,
)
