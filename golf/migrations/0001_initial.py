import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Submission",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "category",
                    models.PositiveSmallIntegerField(choices=[(1, "Category 1"), (2, "Category 2")], default=1),
                ),
                ("team_number", models.PositiveIntegerField()),
                (
                    "language",
                    models.CharField(choices=[("javascript", "JavaScript")], default="javascript", max_length=20),
                ),
                ("code", models.TextField()),
                ("output", models.TextField(blank=True, default="")),
                ("character_count", models.PositiveIntegerField()),
                ("solve_time_seconds", models.PositiveIntegerField(blank=True, null=True)),
                ("is_valid", models.BooleanField(db_index=True, default=False)),
                ("validated_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "ordering": ("character_count", "solve_time_seconds", "created_at"),
                "indexes": [models.Index(fields=["is_valid", "character_count"], name="golf_valid_chars_idx")],
            },
        ),
    ]
