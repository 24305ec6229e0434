import random
import time
from collections.abc import Callable
from typing import Any

from src.schemas.activity import NormalizedActivity

DEFAULT_TITLE = "Aktivitet"
DEFAULT_CATEGORY = "Aktivitet"
DEFAULT_AGE_GROUP = "Alle aldre"
DEFAULT_PRICE = "Gratis"
DEFAULT_WHEN = "Kommende"
PLACEHOLDER_IMAGE = "/images/placeholder-activity.png"


def _dig(value: Any, *path: str | int) -> Any:
    """Follow ``path`` through nested dicts/lists, returning None at the first missing step."""
    current = value
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or step >= len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


def _scalar(value: Any) -> str | None:
    if value is None or isinstance(value, (bool, dict, list)):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _text(value: Any) -> str | None:
    """Like ``_scalar`` but empty strings and numeric zero count as missing."""
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return None
    return _scalar(value) or None


def _as_list(value: Any) -> list | None:
    return value if isinstance(value, list) else None


def _activity_hits(payload: Any) -> list | None:
    return _as_list(_dig(payload, "activities", "hits"))


def _top_level_list(payload: Any) -> list | None:
    return _as_list(payload)


def _data_list(payload: Any) -> list | None:
    return _as_list(_dig(payload, "data"))


RECORD_LOCATORS: tuple[Callable[[Any], list | None], ...] = (
    _activity_hits,
    _top_level_list,
    _data_list,
)


def locate_activity_records(payload: Any) -> list:
    """Find the list of activity records inside an Ungfritid payload.

    Locators are tried in order and the first list found wins. A payload with no
    recognisable list yields an empty list.
    """
    for locate in RECORD_LOCATORS:
        records = locate(payload)
        if records is not None:
            return records
    return []


def _fallback_id() -> str:
    return f"{int(time.time() * 1000)}-{random.random()}"


def _age_label(ranges: Any) -> str | None:
    age_from = _scalar(_dig(ranges, 0, "from"))
    age_to = _scalar(_dig(ranges, 0, "to"))
    if age_from is None or age_to is None:
        return None
    return f"{age_from}-{age_to} år"


def _price_label(prices: Any) -> str | None:
    price = _scalar(_dig(prices, 0, "price"))
    if price is None:
        return None
    return f"{price} kr"


def normalize_activity(record: Any, municipality: str) -> NormalizedActivity:
    slug = _text(_dig(record, "slug"))

    activity_id = _text(_dig(record, "_id")) or _text(_dig(record, "id")) or slug or _fallback_id()
    title = (
        (slug.replace("-", " ") if slug else None)
        or _text(_dig(record, "basicInfo", "activityTitle"))
        or DEFAULT_TITLE
    )
    description = (
        _text(_dig(record, "moreAboutActivity", "shortDescription"))
        or _text(_dig(record, "basicInfo", "activityDescription"))
        or ""
    )
    age_group = (
        _age_label(_dig(record, "activityFor", "age"))
        or _age_label(_dig(record, "ageGroup"))
        or DEFAULT_AGE_GROUP
    )
    location = (
        _text(_dig(record, "contactPositions", 0, "position", "description")) or municipality
    )
    image = _text(_dig(record, "basicInfo", "image")) or PLACEHOLDER_IMAGE
    category = _text(_dig(record, "tags", 0)) or DEFAULT_CATEGORY
    price = _price_label(_dig(record, "necessaryEquipment", "prices")) or DEFAULT_PRICE
    when = _text(_dig(record, "basicInfo", "when")) or DEFAULT_WHEN

    return NormalizedActivity(
        id=activity_id,
        title=title,
        description=description,
        age_group=age_group,
        location=location,
        image=image,
        category=category,
        price=price,
        when=when,
        municipality=municipality,
    )
