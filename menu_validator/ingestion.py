"""
Menu ingestion.

Walks the paginated endpoint until the declared total is exhausted and
collects every record, or reads the same page documents from a local file.
Pagination counters are returned to the caller rather than kept on the
client.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Union

from menu_validator.api_client import MenuApiClient
from menu_validator.graph import MenuGraph
from menu_validator.parser import (
    MenuPage,
    MenuParseError,
    MenuRecord,
    build_graph,
    parse_menu_page,
)

logger = logging.getLogger(__name__)


@dataclass
class MenuCollection:
    """All records of a paginated listing plus its aggregate counters."""
    records: List[MenuRecord] = field(default_factory=list)
    total: int = 0
    per_page: int = 0
    pages_fetched: int = 0


def page_count(total: int, per_page: int) -> int:
    """
    Number of pages needed to list `total` records, `per_page` at a time.

    Always at least 1 so the first page is fetched even for an empty listing
    or a server that reports no page size.
    """
    if per_page <= 0 or total <= 0:
        return 1
    return -(-total // per_page)


def collect_pages(pages: Iterable[MenuPage]) -> MenuCollection:
    """
    Merge already decoded pages into one MenuCollection.

    Counters are taken from the first page that carries a pagination block.
    """
    collection = MenuCollection()
    counters_seen = False
    for page in pages:
        collection.records.extend(page.menus)
        collection.pages_fetched += 1
        if page.pagination is not None and not counters_seen:
            collection.total = page.pagination.total
            collection.per_page = page.pagination.per_page
            counters_seen = True
    return collection


def fetch_all_menus(client: MenuApiClient) -> MenuCollection:
    """
    Fetch every page of menus.

    The page count is derived once, from the pagination block of page 1.

    Args:
        client: MenuApiClient pointed at the endpoint

    Returns:
        MenuCollection with records in page order

    Raises:
        ApiError: If any page request fails
    """
    first_page = client.get_page(1)
    pages = [first_page]

    total_pages = 1
    if first_page.pagination is not None:
        total_pages = page_count(first_page.pagination.total, first_page.pagination.per_page)

    logger.info(f"Fetching {total_pages} page(s) of menus from {client.base_url}")
    for page_num in range(2, total_pages + 1):
        pages.append(client.get_page(page_num))

    collection = collect_pages(pages)
    logger.info(
        f"Fetched {len(collection.records)} menus "
        f"(declared total {collection.total}, {collection.per_page} per page)"
    )
    return collection


def load_menu_file(path: Union[str, Path]) -> MenuCollection:
    """
    Read menus from a local JSON file instead of the endpoint.

    The file holds either one page document or a list of page documents.

    Raises:
        MenuParseError: If the file is not valid JSON or a page is malformed
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MenuParseError(f"Invalid JSON in {path}: {e}")

    documents = payload if isinstance(payload, list) else [payload]
    collection = collect_pages(parse_menu_page(doc) for doc in documents)
    logger.info(f"Loaded {len(collection.records)} menus from {path}")
    return collection


def load_graph(collection: MenuCollection) -> MenuGraph:
    """Build the MenuGraph for a collection."""
    graph = build_graph(collection.records)
    logger.debug(f"Built {graph!r} with adjacency for ids {list(graph.node_ids)}")
    return graph
