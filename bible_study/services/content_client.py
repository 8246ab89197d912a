"""
Content provider client: book catalog of a translation (GET {base}/api/{translation}/books.json).
Only the fields the plan generator needs are kept: id, commonName, firstChapterNumber, numberOfChapters.
Catalog JSON is cached in Redis (when configured) under catalog:{translation}.
"""
import json
from typing import Any, Dict, Optional

import httpx

from bible_study.config import get_settings
from bible_study.errors import ContentProviderError
from bible_study.infrastructure.redis_cache import cache_delete, cache_get, cache_set
from bible_study.logging_config import get_logger
from bible_study.services.plan_generator import BookCatalogEntry

logger = get_logger(__name__)

CATALOG_CACHE_PREFIX = "catalog:"

BookCatalog = Dict[str, BookCatalogEntry]


def parse_book_catalog(payload: Dict[str, Any]) -> BookCatalog:
    """
    books.json payload -> {book_id: BookCatalogEntry}.
    Books missing id/commonName or with a non-positive chapter count are skipped.
    """
    books = payload.get("books") if isinstance(payload, dict) else None
    if not isinstance(books, list):
        raise ContentProviderError("books.json has no books list", code="catalog_malformed")
    catalog: BookCatalog = {}
    for book in books:
        if not isinstance(book, dict):
            continue
        book_id = str(book.get("id") or "").strip()
        common_name = str(book.get("commonName") or book.get("name") or "").strip()
        try:
            first = int(book.get("firstChapterNumber") or 1)
            count = int(book.get("numberOfChapters") or 0)
        except (TypeError, ValueError):
            continue
        if not book_id or not common_name or count < 1:
            continue
        catalog[book_id] = BookCatalogEntry(
            first_chapter_number=first,
            number_of_chapters=count,
            common_name=common_name,
        )
    return catalog


def _catalog_to_json(catalog: BookCatalog) -> str:
    return json.dumps(
        {
            "books": [
                {
                    "id": book_id,
                    "commonName": e.common_name,
                    "firstChapterNumber": e.first_chapter_number,
                    "numberOfChapters": e.number_of_chapters,
                }
                for book_id, e in catalog.items()
            ]
        }
    )


async def fetch_book_catalog(
    translation_id: str,
    client: Optional[httpx.AsyncClient] = None,
) -> BookCatalog:
    """
    Book catalog for translation_id, from cache or the content provider.
    Raises ContentProviderError on network errors, HTTP >= 400 or a malformed body.
    """
    settings = get_settings()
    cache_key = CATALOG_CACHE_PREFIX + translation_id
    cached = await cache_get(cache_key)
    if cached:
        try:
            return parse_book_catalog(json.loads(cached))
        except (ValueError, ContentProviderError):
            logger.warning("content_client.cache_corrupt", translation_id=translation_id)
            await cache_delete(cache_key)

    url = f"{settings.content_api_base_url.rstrip('/')}/api/{translation_id}/books.json"
    try:
        if client is not None:
            resp = await client.get(url)
        else:
            async with httpx.AsyncClient(timeout=settings.content_api_timeout_seconds) as own_client:
                resp = await own_client.get(url)
    except httpx.HTTPError as e:
        logger.warning("content_client.request_error", translation_id=translation_id, error=str(e))
        raise ContentProviderError("Content provider unavailable", code="content_provider_unavailable") from e

    if resp.status_code >= 400:
        logger.warning(
            "content_client.bad_status",
            translation_id=translation_id,
            status=resp.status_code,
            body=resp.text[:300],
        )
        raise ContentProviderError(
            f"Content provider returned {resp.status_code}",
            code="content_provider_unavailable",
        )
    try:
        payload = resp.json()
    except ValueError as e:
        raise ContentProviderError("books.json is not valid JSON", code="catalog_malformed") from e

    catalog = parse_book_catalog(payload)
    logger.info("content_client.catalog_fetched", translation_id=translation_id, books=len(catalog))
    await cache_set(cache_key, _catalog_to_json(catalog), ttl_seconds=settings.book_catalog_cache_ttl_seconds)
    return catalog
