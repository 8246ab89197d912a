"""
Preview a reading plan against the live content provider: readings per scope and estimated days.
Usage: python scripts/plan_preview.py gospels --translation BSB --per-day 2 [--list]
Exit codes: 2 unknown scope, 3 content provider error.
"""
import argparse
import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from bible_study.config import get_settings
from bible_study.errors import ContentProviderError
from bible_study.services.content_client import fetch_book_catalog
from bible_study.services.plan_generator import PLAN_SCOPES, estimate_days, generate_readings, get_scope

EXIT_UNKNOWN_SCOPE = 2
EXIT_PROVIDER_ERROR = 3


async def _run(scope_id: str, translation_id: str, per_day: float, show_list: bool) -> int:
    try:
        catalog = await fetch_book_catalog(translation_id)
    except ContentProviderError as e:
        print(f"[ERROR] {e} ({e.code})")
        return EXIT_PROVIDER_ERROR
    readings = generate_readings(scope_id, catalog, translation_id)
    days = estimate_days(len(readings), per_day)
    print(f"{scope_id} / {translation_id}: {len(readings)} readings, ~{days} days at {max(int(per_day), 1)}/day")
    if show_list:
        for i, r in enumerate(readings):
            print(f"{i:4d}  {r.label}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("scope", help="one of: " + ", ".join(s.id for s in PLAN_SCOPES))
    parser.add_argument("--translation", default=get_settings().default_translation)
    parser.add_argument("--per-day", type=float, default=1.0)
    parser.add_argument("--list", action="store_true", help="print every reading")
    args = parser.parse_args()

    if get_scope(args.scope) is None:
        print(f"[ERROR] Unknown scope: {args.scope}")
        return EXIT_UNKNOWN_SCOPE
    return asyncio.run(_run(args.scope, args.translation, args.per_day, args.list))


if __name__ == "__main__":
    sys.exit(main())
