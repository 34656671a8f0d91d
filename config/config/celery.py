"""
Celery configuration for the GH News project.

The worker runs the best-effort side effects of the site:
- delayed article view counting (scheduled by page views, revocable)
- search-engine notification after an article is published
"""

import os
import platform
from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('config')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()

# Use 'solo' pool on Windows (prefork/billiard doesn't work on Windows)
if platform.system() == 'Windows':
    app.conf.worker_pool = 'solo'
