import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Leaderboard",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "scoring_type",
                    models.CharField(
                        choices=[
                            ("points_high", "Points (High Score Wins)"),
                            ("points_low", "Points (Low Score Wins)"),
                            ("time_fast", "Time (Fastest Wins)"),
                            ("time_slow", "Time (Longest Wins)"),
                        ],
                        default="points_high",
                        max_length=20,
                    ),
                ),
                ("score_label", models.CharField(default="Points", max_length=50)),
                ("allow_updates", models.BooleanField(default=False)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "ordering": ("id",),
            },
        ),
        migrations.CreateModel(
            name="Entry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("team_name", models.CharField(max_length=120)),
                ("score", models.FloatField()),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "leaderboard",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="entries",
                        to="boards.leaderboard",
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["leaderboard", "created_at"], name="entry_board_created_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("leaderboard", "team_name"), name="uniq_entry_board_team")
                ],
            },
        ),
    ]
