# boards/forms.py
from __future__ import annotations

import math

from django import forms

from .models import Leaderboard, default_score_label


class LeaderboardForm(forms.ModelForm):
    class Meta:
        model = Leaderboard
        fields = ("name", "description", "scoring_type", "score_label", "allow_updates", "is_active")
        widgets = {
            "description": forms.Textarea(attrs={"rows": 3, "placeholder": "e.g., Test your tech knowledge!"}),
            "name": forms.TextInput(attrs={"placeholder": "e.g., Hackathon Trivia Night"}),
            "score_label": forms.TextInput(attrs={"placeholder": "e.g., Points, Time, Questions"}),
        }
        labels = {
            "name": "Leaderboard Name",
            "description": "Description (Optional)",
            "allow_updates": "Allow teams to update their scores",
            "is_active": "Leaderboard is active",
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["score_label"].required = False
        self.fields["description"].required = False
        # new boards are always created active
        if self.instance.pk is None:
            del self.fields["is_active"]

    def clean_name(self):
        name = (self.cleaned_data.get("name") or "").strip()
        if not name:
            raise forms.ValidationError("Leaderboard name is required.")
        return name

    def clean_description(self):
        return (self.cleaned_data.get("description") or "").strip()

    def clean(self):
        cleaned = super().clean()
        label = (cleaned.get("score_label") or "").strip()
        cleaned["score_label"] = label or default_score_label(cleaned.get("scoring_type") or "points_high")
        return cleaned


class EntryForm(forms.Form):
    team_name = forms.CharField(
        label="Team/Participant Name",
        max_length=120,
        widget=forms.TextInput(attrs={"placeholder": "Enter your team name"}),
    )
    score = forms.FloatField(widget=forms.NumberInput(attrs={"step": "any"}))

    def __init__(self, *args, leaderboard: Leaderboard, **kwargs):
        super().__init__(*args, **kwargs)
        self.leaderboard = leaderboard
        self.fields["score"].label = leaderboard.score_label
        self.fields["score"].widget.attrs["placeholder"] = f"Enter {leaderboard.score_label.lower()}"

    def clean_team_name(self):
        name = (self.cleaned_data.get("team_name") or "").strip()
        if not name:
            raise forms.ValidationError("Please enter a team name.")
        return name

    def clean_score(self):
        score = self.cleaned_data.get("score")
        if score is None or not math.isfinite(score):
            raise forms.ValidationError("Score must be a finite number.")
        return score
