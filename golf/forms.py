# golf/forms.py
from django import forms

from .models import Submission


class TeamStartForm(forms.Form):
    category = forms.TypedChoiceField(
        choices=Submission.CATEGORY_CHOICES,
        coerce=int,
        initial=1,
        widget=forms.RadioSelect,
    )
    team_number = forms.IntegerField(
        min_value=1,
        error_messages={"required": "Please enter your team number"},
        widget=forms.NumberInput(attrs={"placeholder": "Enter your team number"}),
    )


class ChallengeForm(forms.Form):
    code = forms.CharField(
        widget=forms.Textarea(attrs={"rows": 10, "spellcheck": "false"}),
        error_messages={"required": "Paste your solution before submitting"},
    )
    output = forms.CharField(
        label="Program output",
        widget=forms.Textarea(attrs={"rows": 10, "spellcheck": "false"}),
        error_messages={"required": "Paste the output of your program"},
        strip=False,
    )
