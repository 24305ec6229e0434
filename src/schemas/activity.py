from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from src.core.config import settings


class NormalizedActivity(BaseModel):
    id: str
    title: str
    description: str
    age_group: str
    location: str
    image: str
    category: str
    price: str
    when: str
    municipality: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActivitiesResponse(BaseModel):
    success: Literal[True] = True
    data: list[NormalizedActivity]
    count: int
    municipality: str
    timestamp: datetime


class ActivityErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
    details: str | None = None


class ErrorMessage(BaseModel):
    error: str


def coerce_limit(value: Any) -> int:
    """Turn a query-string or JSON limit into an int, falling back to the default."""
    if value is None or isinstance(value, bool):
        return settings.default_activity_limit
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else settings.default_activity_limit
    try:
        return int(str(value).strip())
    except ValueError:
        return settings.default_activity_limit


class ActivitiesRequest(BaseModel):
    municipality: str | None = settings.default_municipality
    limit: int = settings.default_activity_limit

    @field_validator("limit", mode="before")
    @classmethod
    def _limit_defaults_when_not_numeric(cls, value: Any) -> int:
        return coerce_limit(value)
