# boards/signals.py
from __future__ import annotations

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .events import board_channel, notify
from .models import Entry, Leaderboard


def _notify_board(leaderboard_id):
    channel = board_channel(leaderboard_id)
    # listeners re-fetch, so only signal once the row is visible
    transaction.on_commit(lambda: notify(channel))


@receiver(post_save, sender=Entry)
@receiver(post_delete, sender=Entry)
def entry_changed(sender, instance, **kwargs):
    _notify_board(instance.leaderboard_id)


@receiver(post_save, sender=Leaderboard)
@receiver(post_delete, sender=Leaderboard)
def leaderboard_changed(sender, instance, **kwargs):
    _notify_board(instance.id)
