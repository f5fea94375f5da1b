from django.conf import settings
from django.core.management.base import BaseCommand
from django_celery_beat.models import CrontabSchedule, PeriodicTask


def _has_field(model, field_name: str) -> bool:
    return any(f.name == field_name for f in model._meta.fields)


class Command(BaseCommand):
    help = "Create/update Celery Beat periodic tasks (code golf validation sweep)."

    def handle(self, *args, **options):
        tz = getattr(settings, "TIME_ZONE", "UTC")

        # every 5 minutes
        cron_5min_kwargs = dict(minute="*/5", hour="*", day_of_week="*", day_of_month="*", month_of_year="*")
        if _has_field(CrontabSchedule, "timezone"):
            cron_5min_kwargs["timezone"] = tz
        cron_5min, _ = CrontabSchedule.objects.get_or_create(**cron_5min_kwargs)

        PeriodicTask.objects.update_or_create(
            name="Golf: validate pending submissions (every 5 min)",
            defaults={
                "task": "golf.tasks.validate_pending_submissions",
                "crontab": cron_5min,
                "enabled": True,
            },
        )

        self.stdout.write(self.style.SUCCESS("Periodic tasks created/updated OK."))
