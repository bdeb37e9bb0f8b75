"""
Text helpers shared by the markdown renderers
"""
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Union


def tag_value(tag: Union[str, Enum]) -> str:
    """Plain string for an enum member or a raw tag"""
    return tag.value if isinstance(tag, Enum) else str(tag)


def humanize(tag: Union[str, Enum]) -> str:
    """'self_employment' -> 'self employment'"""
    return tag_value(tag).replace("_", " ")


def humanize_list(tags: Iterable[Union[str, Enum]]) -> str:
    return ", ".join(humanize(tag) for tag in tags)


def title(tag: Union[str, Enum]) -> str:
    """'complex' -> 'Complex'"""
    text = humanize(tag)
    return text[:1].upper() + text[1:]


def stars(rating: float) -> str:
    """Star string for a 0-5 rating, e.g. '⭐⭐⭐⭐ (4.8/5)'"""
    return f"{'⭐' * math.floor(rating)} ({rating:g}/5)"


def format_time(moment: datetime) -> str:
    """'3:30 PM'"""
    return moment.strftime("%I:%M %p").lstrip("0")


def to_naive_utc(moment: datetime) -> datetime:
    """
    Normalize caller-supplied timestamps to the naive UTC values the database stores.

    Naive input is passed through untouched.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)
