# boards/templatetags/board_format.py
from django import template

from boards import formatting

register = template.Library()


@register.filter
def time_display(seconds):
    return formatting.format_time(seconds)


@register.filter
def relative_age(ts):
    if not ts:
        return ""
    return formatting.format_relative(ts)


@register.filter
def rank_icon(rank):
    return formatting.rank_icon(rank)


@register.filter
def rank_class(rank):
    # podium rows get their own style
    if rank in (1, 2, 3):
        return f"rank-{rank}"
    return "rank-other"
