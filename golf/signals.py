# golf/signals.py
from __future__ import annotations

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from boards.events import GOLF_CHANNEL, notify
from .models import Submission


@receiver(post_save, sender=Submission)
@receiver(post_delete, sender=Submission)
def submission_changed(sender, instance, **kwargs):
    transaction.on_commit(lambda: notify(GOLF_CHANNEL))
