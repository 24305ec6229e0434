import json
import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from src.core.config import settings

logger = logging.getLogger(__name__)

# Lower-cased municipality name -> place name expected by Ungfritid.
MUNICIPALITY_PLACES = {
    "oslo": "Oslo",
    "bergen": "Bergen",
    "trondheim": "Trondheim",
    "stavanger": "Stavanger",
    "kristiansand": "Kristiansand",
    "tromso": "Tromsø",
}
ERROR_BODY_PREVIEW_CHARS = 200
PAYLOAD_PREVIEW_CHARS = 500


class UngfritidError(Exception):
    """Raised when the Ungfritid API cannot deliver a usable payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def default_headers() -> dict[str, str]:
    return {
        "Accept": "application/json",
        "User-Agent": settings.ungfritid_user_agent,
    }


def resolve_place(municipality: str) -> str:
    """Map a municipality to Ungfritid's place name, passing unknown names through as given."""
    return MUNICIPALITY_PLACES.get(municipality.lower(), municipality)


def build_ungfritid_query(municipality: str, limit: int = 50) -> dict[str, str]:
    return {
        "area": settings.ungfritid_area,
        "place": resolve_place(municipality),
        "maxActivities": str(limit),
    }


async def fetch_ungfritid_payload(
    client: httpx.AsyncClient,
    municipality: str,
    limit: int,
) -> Any:
    """Run one GET against the findactivities endpoint and return the decoded JSON body.

    Transport failures, non-2xx statuses and undecodable bodies all surface as
    ``UngfritidError``. Nothing is retried.
    """
    url = httpx.URL(settings.ungfritid_base_url, params=build_ungfritid_query(municipality, limit))
    logger.info("[ungfritid] fetching activities for municipality=%s", municipality)
    logger.info("[ungfritid] url=%s", url)

    try:
        response = await client.get(url, headers=default_headers())
    except httpx.HTTPError as exc:
        logger.error("[ungfritid] transport error=%s", exc)
        raise UngfritidError(f"Ungfritid request failed: {exc}") from exc

    if not response.is_success:
        logger.error(
            "[ungfritid] error status=%s %s body=%s",
            response.status_code,
            response.reason_phrase,
            response.text[:ERROR_BODY_PREVIEW_CHARS],
        )
        raise UngfritidError(
            f"Ungfritid API returned {response.status_code}",
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as exc:
        logger.error("[ungfritid] could not decode JSON body: %s", exc)
        raise UngfritidError(f"Ungfritid API returned invalid JSON: {exc}") from exc

    logger.info("[ungfritid] response received, parsing")
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "[ungfritid] raw response (first %s chars): %s",
            PAYLOAD_PREVIEW_CHARS,
            json.dumps(payload, ensure_ascii=False)[:PAYLOAD_PREVIEW_CHARS],
        )
        if isinstance(payload, dict):
            logger.debug("[ungfritid] top-level keys: %s", list(payload)[:10])
        else:
            logger.debug("[ungfritid] top-level type: %s", type(payload).__name__)
    return payload


async def get_ungfritid_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=settings.ungfritid_timeout_seconds) as client:
        yield client
