import json
import logging
from pathlib import Path
from typing import Any

from src.core.config import settings

logger = logging.getLogger(__name__)


class CityNotFoundError(LookupError):
    pass


class CatalogUnavailableError(RuntimeError):
    pass


def load_city_activities(city: str, path: str | Path | None = None) -> Any:
    """Return the static ``{city, activities}`` entry stored under ``city``.

    The catalog file is keyed by lower-cased city name and is read on every call.
    """
    catalog_path = Path(path or settings.static_activities_path)
    try:
        catalog = json.loads(catalog_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.error("[city-catalog] failed to read %s: %s", catalog_path, exc)
        raise CatalogUnavailableError(str(exc)) from exc

    if not isinstance(catalog, dict):
        logger.error("[city-catalog] %s does not hold a JSON object", catalog_path)
        raise CatalogUnavailableError(f"{catalog_path} does not hold a JSON object")

    key = city.strip().lower()
    if key not in catalog:
        raise CityNotFoundError(city)
    return catalog[key]
