# scoreboard/celery.py
import os
from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "scoreboard.settings")

app = Celery("scoreboard")

# settings prefixed with CELERY_ come from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# picks up tasks.py from every installed app
app.autodiscover_tasks()

# Redis may still be starting when the worker boots
app.conf.broker_connection_retry_on_startup = True

app.conf.task_track_started = True
