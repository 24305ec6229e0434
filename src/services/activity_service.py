import logging
from datetime import datetime, timezone

import httpx

from src.schemas.activity import ActivitiesResponse
from src.ungfritid.client import fetch_ungfritid_payload
from src.ungfritid.transform import locate_activity_records, normalize_activity

logger = logging.getLogger(__name__)


async def get_municipality_activities(
    client: httpx.AsyncClient,
    *,
    municipality: str,
    limit: int,
) -> ActivitiesResponse:
    """Fetch Ungfritid activities for a municipality and normalise them.

    Raises ``UngfritidError`` when the upstream call fails. A payload without any
    recognisable activity list is a successful, empty result.
    """
    payload = await fetch_ungfritid_payload(client, municipality, limit)

    records = locate_activity_records(payload)
    if not records:
        logger.info("[ungfritid] no activities found in response")
    logger.info("[ungfritid] found %s activities", len(records))

    activities = [normalize_activity(record, municipality) for record in records[:limit]]
    logger.info("[ungfritid] transformed %s activities", len(activities))

    return ActivitiesResponse(
        data=activities,
        count=len(activities),
        municipality=municipality,
        timestamp=datetime.now(timezone.utc),
    )
