import logging

import httpx
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.core.config import settings
from src.schemas.activity import (
    ActivitiesRequest,
    ActivitiesResponse,
    ActivityErrorResponse,
    ErrorMessage,
    coerce_limit,
)
from src.services.activity_service import get_municipality_activities
from src.services.city_catalog import CatalogUnavailableError, CityNotFoundError, load_city_activities
from src.ungfritid.client import UngfritidError, get_ungfritid_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["activities"])

UPSTREAM_FAILURE_MESSAGE = "Failed to fetch activities from Ungfritid"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorMessage(error=message).model_dump())


async def _respond_with_activities(
    client: httpx.AsyncClient,
    municipality: str,
    limit: int,
) -> ActivitiesResponse | JSONResponse:
    try:
        return await get_municipality_activities(client, municipality=municipality, limit=limit)
    except UngfritidError as exc:
        logger.error("[ungfritid] request for %s failed: %s", municipality, exc)
        body = ActivityErrorResponse(error=UPSTREAM_FAILURE_MESSAGE, details=str(exc))
        return JSONResponse(status_code=500, content=body.model_dump())


@router.get(
    "/activities",
    response_model=ActivitiesResponse,
    responses={
        404: {"model": ErrorMessage},
        500: {"model": ActivityErrorResponse},
    },
)
async def get_activities(
    city: str | None = Query(default=None, description="Look up the bundled static catalog."),
    municipality: str | None = None,
    limit: str | None = None,
    client: httpx.AsyncClient = Depends(get_ungfritid_client),
):
    if city is not None:
        try:
            return JSONResponse(content=load_city_activities(city))
        except CityNotFoundError:
            return _error(404, "City not found")
        except CatalogUnavailableError:
            return _error(500, "Failed to load activities")

    return await _respond_with_activities(
        client,
        municipality or settings.default_municipality,
        coerce_limit(limit),
    )


@router.post(
    "/activities",
    response_model=ActivitiesResponse,
    responses={
        400: {"model": ErrorMessage},
        500: {"model": ActivityErrorResponse},
    },
)
async def post_activities(
    request: Request,
    client: httpx.AsyncClient = Depends(get_ungfritid_client),
):
    try:
        raw = await request.json()
        if not isinstance(raw, dict):
            raise ValueError("request body must be a JSON object")
        body = ActivitiesRequest.model_validate(raw)
    except (ValueError, ValidationError) as exc:
        logger.warning("[ungfritid] POST rejected: %s", exc)
        return _error(400, "Invalid request body")

    if not body.municipality:
        return _error(400, "Municipality parameter is required")

    return await _respond_with_activities(client, body.municipality, body.limit)
