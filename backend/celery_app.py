"""Celery app that runs wardrobe imports in the background."""

import os

from celery import Celery
from dotenv import load_dotenv

load_dotenv()

REDIS_URL = "redis://localhost:6379/0"

celery_app = Celery(
    "wardrobe_import_tasks",
    broker=os.getenv("CELERY_BROKER_URL", REDIS_URL),
    backend=os.getenv("CELERY_RESULT_BACKEND", REDIS_URL),
    include=["tasks.import_tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    enable_utc=True,
    timezone="UTC",
    # Report STARTED so status polling can tell queued from running
    task_track_started=True,
    # One import per worker process at a time
    worker_prefetch_multiplier=1,
    task_time_limit=600,
    task_soft_time_limit=570,
    # Finished results are polled once by the client, then dropped
    result_expires=int(os.getenv("WARDROBE_RESULT_EXPIRES", "3600")),
)
