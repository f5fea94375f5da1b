"""Leaderboard models, services and pages."""
from __future__ import annotations

from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from boards.events import get_feed
from boards.forms import LeaderboardForm
from boards.models import Entry, Leaderboard
from boards.services import (
    DuplicateTeamError,
    InvalidScoreError,
    active_leaderboards,
    board_snapshot,
    submit_entry,
)
from boards.views import sse_stream


def make_board(**kw) -> Leaderboard:
    defaults = {"name": "Trivia Night", "scoring_type": "points_high", "score_label": "Points"}
    defaults.update(kw)
    return Leaderboard.objects.create(**defaults)


class SubmitEntryTests(TestCase):
    def test_creates_entry_with_trimmed_name(self):
        lb = make_board()
        entry, created = submit_entry(leaderboard=lb, team_name="  Owls  ", score=12)
        self.assertTrue(created)
        self.assertEqual(entry.team_name, "Owls")
        self.assertEqual(Entry.objects.count(), 1)

    def test_duplicate_rejected_when_updates_disallowed(self):
        lb = make_board(allow_updates=False)
        submit_entry(leaderboard=lb, team_name="Owls", score=12)
        with self.assertRaises(DuplicateTeamError):
            submit_entry(leaderboard=lb, team_name="Owls", score=99)
        self.assertEqual(Entry.objects.get().score, 12)

    def test_same_team_on_another_board_is_fine(self):
        submit_entry(leaderboard=make_board(), team_name="Owls", score=1)
        submit_entry(leaderboard=make_board(name="Other"), team_name="Owls", score=2)
        self.assertEqual(Entry.objects.count(), 2)

    def test_update_keeps_created_at(self):
        lb = make_board(allow_updates=True)
        first, _ = submit_entry(leaderboard=lb, team_name="Owls", score=12)
        second, created = submit_entry(leaderboard=lb, team_name="Owls", score=30)
        self.assertFalse(created)
        self.assertEqual(first.pk, second.pk)
        second.refresh_from_db()
        self.assertEqual(second.score, 30)
        self.assertEqual(second.created_at, first.created_at)
        self.assertGreaterEqual(second.updated_at, first.updated_at)

    def test_rejects_invalid_input(self):
        lb = make_board()
        with self.assertRaises(ValueError):
            submit_entry(leaderboard=lb, team_name="   ", score=1)
        with self.assertRaises(InvalidScoreError):
            submit_entry(leaderboard=lb, team_name="Owls", score=float("nan"))
        self.assertFalse(Entry.objects.exists())


class SnapshotTests(TestCase):
    def test_ranks_with_timestamp_tie_break(self):
        lb = make_board()
        t = timezone.now()
        Entry.objects.create(leaderboard=lb, team_name="b", score=100, created_at=t + timedelta(seconds=10))
        Entry.objects.create(leaderboard=lb, team_name="a", score=100, created_at=t + timedelta(seconds=5))
        Entry.objects.create(leaderboard=lb, team_name="c", score=90, created_at=t + timedelta(seconds=20))

        snapshot = board_snapshot(lb)
        self.assertEqual([r.entry.team_name for r in snapshot.rows], ["a", "b", "c"])
        self.assertEqual([r.rank for r in snapshot.rows], [1, 2, 3])

    def test_time_board_lower_wins_and_formats(self):
        lb = make_board(scoring_type="time_fast", score_label="Time")
        Entry.objects.create(leaderboard=lb, team_name="slow", score=125)
        Entry.objects.create(leaderboard=lb, team_name="fast", score=42)

        rows = board_snapshot(lb).rows
        self.assertEqual([(r.entry.team_name, r.display_score) for r in rows], [("fast", "42s"), ("slow", "2:05")])

    def test_empty(self):
        self.assertTrue(board_snapshot(make_board()).is_empty)

    def test_active_leaderboards_counts_entries(self):
        lb = make_board()
        make_board(name="Hidden", is_active=False)
        Entry.objects.create(leaderboard=lb, team_name="x", score=1)
        Entry.objects.create(leaderboard=lb, team_name="y", score=2)

        boards = list(active_leaderboards())
        self.assertEqual([b.name for b in boards], ["Trivia Night"])
        self.assertEqual(boards[0].entry_count, 2)


class LeaderboardFormTests(TestCase):
    def test_blank_label_defaults_from_scoring_type(self):
        form = LeaderboardForm({"name": "Race", "scoring_type": "time_fast", "score_label": ""})
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.save().score_label, "Time")

    def test_blank_name_rejected(self):
        form = LeaderboardForm({"name": "   ", "scoring_type": "points_high"})
        self.assertFalse(form.is_valid())
        self.assertIn("name", form.errors)


class PageTests(TestCase):
    def test_home_lists_active_boards(self):
        make_board(name="Visible")
        make_board(name="Retired", is_active=False)
        resp = self.client.get(reverse("home"))
        self.assertContains(resp, "Visible")
        self.assertNotContains(resp, "Retired")

    def test_home_empty_state(self):
        resp = self.client.get(reverse("home"))
        self.assertContains(resp, "No active leaderboards yet")

    def test_create_redirects_to_board(self):
        resp = self.client.post(
            reverse("boards:create"),
            {"name": "Hackathon", "description": "", "scoring_type": "points_low", "score_label": ""},
        )
        lb = Leaderboard.objects.get()
        self.assertRedirects(resp, reverse("boards:leaderboard", args=[lb.id]))
        self.assertTrue(lb.is_active)
        self.assertEqual(lb.score_label, "Points")

    def test_edit_updates_board(self):
        lb = make_board()
        resp = self.client.post(
            reverse("boards:edit", args=[lb.id]),
            {"name": "Renamed", "scoring_type": "points_high", "score_label": "Pts", "is_active": ""},
        )
        self.assertRedirects(resp, reverse("home"))
        lb.refresh_from_db()
        self.assertEqual(lb.name, "Renamed")
        self.assertFalse(lb.is_active)

    def test_delete_requires_post_and_cascades(self):
        lb = make_board()
        Entry.objects.create(leaderboard=lb, team_name="x", score=1)
        self.assertEqual(self.client.get(reverse("boards:delete", args=[lb.id])).status_code, 405)

        resp = self.client.post(reverse("boards:delete", args=[lb.id]))
        self.assertRedirects(resp, reverse("home"))
        self.assertFalse(Leaderboard.objects.exists())
        self.assertFalse(Entry.objects.exists())

    def test_entry_submission_flow(self):
        lb = make_board()
        resp = self.client.post(reverse("boards:entry", args=[lb.id]), {"team_name": "Owls", "score": "1234567"})
        self.assertRedirects(resp, reverse("boards:leaderboard", args=[lb.id]))

        page = self.client.get(reverse("boards:leaderboard", args=[lb.id]))
        self.assertContains(page, "Owls")
        self.assertContains(page, "1,234,567")
        self.assertContains(page, "Entry submitted successfully!")

    def test_entry_validation_blocks_write(self):
        lb = make_board()
        resp = self.client.post(reverse("boards:entry", args=[lb.id]), {"team_name": "", "score": ""})
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(Entry.objects.exists())

    def test_duplicate_entry_shows_rejection(self):
        lb = make_board()
        Entry.objects.create(leaderboard=lb, team_name="Owls", score=5)
        resp = self.client.post(reverse("boards:entry", args=[lb.id]), {"team_name": "Owls", "score": "8"})
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "already exists")
        self.assertEqual(Entry.objects.get().score, 5)

    def test_update_allowed_board_updates_score(self):
        lb = make_board(allow_updates=True)
        Entry.objects.create(leaderboard=lb, team_name="Owls", score=5)
        resp = self.client.post(reverse("boards:entry", args=[lb.id]), {"team_name": "Owls", "score": "8"}, follow=True)
        self.assertContains(resp, "Score updated successfully!")
        self.assertEqual(Entry.objects.get().score, 8)

    def test_missing_or_inactive_board_is_404(self):
        inactive = make_board(is_active=False)
        self.assertEqual(self.client.get(reverse("boards:leaderboard", args=[999])).status_code, 404)
        self.assertEqual(self.client.get(reverse("boards:entry", args=[inactive.id])).status_code, 404)

    def test_board_empty_state(self):
        lb = make_board()
        resp = self.client.get(reverse("boards:leaderboard", args=[lb.id]))
        self.assertContains(resp, "No entries yet!")

    def test_rows_fragment(self):
        lb = make_board()
        Entry.objects.create(leaderboard=lb, team_name="Owls", score=5)
        resp = self.client.get(reverse("boards:rows", args=[lb.id]))
        self.assertContains(resp, "Owls")
        self.assertNotContains(resp, "<html")

    def test_json_data(self):
        lb = make_board(scoring_type="points_low")
        Entry.objects.create(leaderboard=lb, team_name="hi", score=50)
        Entry.objects.create(leaderboard=lb, team_name="lo", score=3)

        data = self.client.get(reverse("boards:data", args=[lb.id])).json()
        self.assertEqual([e["team_name"] for e in data["entries"]], ["lo", "hi"])
        self.assertEqual(data["entries"][0]["rank"], 1)
        self.assertEqual(data["entries"][0]["submitted"], "Just now")

    def test_json_data_not_found(self):
        resp = self.client.get(reverse("boards:data", args=[404]))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["error"], "Leaderboard not found")

    def test_events_endpoint_streams(self):
        lb = make_board()
        resp = self.client.get(reverse("boards:events", args=[lb.id]))
        self.assertEqual(resp["Content-Type"], "text/event-stream")
        self.assertTrue(resp.streaming)
        resp.close()


class ChangeNotificationTests(TestCase):
    def test_saving_entry_notifies_board_channel(self):
        lb = make_board()
        with get_feed().subscribe(f"board:{lb.id}") as sub:
            with self.captureOnCommitCallbacks(execute=True):
                Entry.objects.create(leaderboard=lb, team_name="Owls", score=1)
            self.assertTrue(sub.wait(0.5))

    def test_nothing_published_before_commit(self):
        lb = make_board()
        with get_feed().subscribe(f"board:{lb.id}") as sub:
            with self.captureOnCommitCallbacks(execute=False):
                Entry.objects.create(leaderboard=lb, team_name="Owls", score=1)
            self.assertFalse(sub.wait(0.01))

    def test_sse_stream_emits_refresh_events_and_releases(self):
        feed = get_feed()
        stream = sse_stream("board:77", 0.01)
        self.assertEqual(next(stream), "retry: 5000\n\n")
        self.assertEqual(next(stream), "event: refresh\ndata: tick\n\n")

        feed.publish("board:77")
        self.assertEqual(next(stream), "event: refresh\ndata: change\n\n")

        stream.close()
        self.assertEqual(feed.subscriber_count("board:77"), 0)
