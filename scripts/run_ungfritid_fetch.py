#!/usr/bin/env python3
import argparse
import asyncio
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.core.config import settings  # noqa: E402
from src.ungfritid.client import UngfritidError, fetch_ungfritid_payload  # noqa: E402
from src.ungfritid.transform import locate_activity_records, normalize_activity  # noqa: E402


DEFAULT_CACHE_DIR = PROJECT_ROOT / "data" / "ungfritid"


def _load_input_json(input_json: str) -> object:
    input_path = Path(input_json)
    if not input_path.exists():
        print(f"Input JSON file not found: {input_path}")
        raise SystemExit(1)
    print(f"Loading payload from file: {input_path}")
    return json.loads(input_path.read_text(encoding="utf-8"))


def _save_payload(payload: object, municipality: str, cache_dir: Path) -> Path:
    cache_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    output_path = cache_dir / f"{municipality.lower()}_{stamp}.json"
    output_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return output_path


async def _fetch(municipality: str, limit: int) -> object:
    async with httpx.AsyncClient(timeout=settings.ungfritid_timeout_seconds) as client:
        return await fetch_ungfritid_payload(client, municipality, limit)


async def main() -> None:
    parser = argparse.ArgumentParser(
        description=(
            "Fetch Ungfritid activities for a municipality and print them in ToGeDoo format, "
            "one JSON object per line."
        )
    )
    parser.add_argument("--municipality", default=settings.default_municipality)
    parser.add_argument("--limit", type=int, default=settings.default_activity_limit)
    parser.add_argument(
        "--input-json",
        default=None,
        help="Normalise a previously saved Ungfritid payload instead of calling the API.",
    )
    parser.add_argument(
        "--save-json",
        action="store_true",
        help="Write the raw Ungfritid payload under --cache-dir for later inspection.",
    )
    parser.add_argument(
        "--cache-dir",
        default=str(DEFAULT_CACHE_DIR),
        help="Directory used by --save-json (default: data/ungfritid).",
    )
    args = parser.parse_args()

    if args.input_json:
        payload = _load_input_json(args.input_json)
    else:
        try:
            payload = await _fetch(args.municipality, args.limit)
        except UngfritidError as exc:
            print(f"Fetch failed: {exc}")
            raise SystemExit(1)

    if args.save_json and not args.input_json:
        saved = _save_payload(payload, args.municipality, Path(args.cache_dir))
        print(f"Saved raw payload to: {saved}")

    records = locate_activity_records(payload)
    activities = [normalize_activity(record, args.municipality) for record in records[: args.limit]]

    print(f"Normalized rows: {len(activities)}")
    for activity in activities:
        print(json.dumps(activity.model_dump(by_alias=True), ensure_ascii=False))


if __name__ == "__main__":
    asyncio.run(main())
