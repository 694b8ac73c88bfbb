"""
Menu page decoding.

Turns the JSON documents served by the menu endpoint into typed records
and loads those records into a MenuGraph.

Page document format:

    {
        "menus": [
            {"id": 1, "data": "House", "child_ids": [3]},
            {"id": 3, "data": "Room", "parent_id": 1, "child_ids": []}
        ],
        "pagination": {"current_page": 1, "per_page": 5, "total": 19}
    }
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from menu_validator.graph import MenuGraph


# ============================================================================
# Exceptions
# ============================================================================


class MenuParseError(ValueError):
    """Raised when a page document does not have the expected shape."""

    pass


# ============================================================================
# Data Structures
# ============================================================================


@dataclass
class MenuRecord:
    """One menu entry as served by the endpoint."""
    id: int
    data: Optional[str] = None
    parent_id: Optional[int] = None
    child_ids: Optional[List[int]] = None  # None when the key is absent

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


@dataclass
class Pagination:
    """Pagination block of a page document."""
    current_page: int
    per_page: int
    total: int


@dataclass
class MenuPage:
    """A decoded page: its records plus pagination counters."""
    menus: List[MenuRecord] = field(default_factory=list)
    pagination: Optional[Pagination] = None


# ============================================================================
# Decoding
# ============================================================================


def _as_int(value: Any, what: str) -> int:
    # bool is an int subclass but never a valid id
    if isinstance(value, bool) or not isinstance(value, int):
        raise MenuParseError(f"{what} must be an integer, got: {value!r}")
    return value


def parse_menu_record(item: Any) -> MenuRecord:
    """
    Decode one entry of the "menus" array.

    Raises:
        MenuParseError: If the entry is not an object or has invalid ids
    """
    if not isinstance(item, dict):
        raise MenuParseError(f"Menu entry must be an object, got: {type(item).__name__}")
    if 'id' not in item:
        raise MenuParseError(f"Menu entry has no id: {item!r}")

    menu_id = _as_int(item['id'], "Menu id")

    parent_id = item.get('parent_id')
    if parent_id is not None:
        parent_id = _as_int(parent_id, f"parent_id of menu {menu_id}")

    child_ids = None
    if item.get('child_ids') is not None:
        raw_children = item['child_ids']
        if not isinstance(raw_children, list):
            raise MenuParseError(f"child_ids of menu {menu_id} must be a list")
        child_ids = [_as_int(c, f"Child id of menu {menu_id}") for c in raw_children]

    data = item.get('data')
    return MenuRecord(
        id=menu_id,
        data=str(data) if data is not None else None,
        parent_id=parent_id,
        child_ids=child_ids,
    )


def parse_pagination(block: Any) -> Pagination:
    """Decode the "pagination" object of a page document."""
    if not isinstance(block, dict):
        raise MenuParseError("pagination must be an object")
    try:
        return Pagination(
            current_page=_as_int(block.get('current_page', 1), "current_page"),
            per_page=_as_int(block['per_page'], "per_page"),
            total=_as_int(block['total'], "total"),
        )
    except KeyError as e:
        raise MenuParseError(f"pagination is missing {e.args[0]!r}")


def parse_menu_page(payload: Any) -> MenuPage:
    """
    Decode a full page document.

    Args:
        payload: Parsed JSON document

    Returns:
        MenuPage with records in document order

    Raises:
        MenuParseError: If the document is malformed
    """
    if not isinstance(payload, dict):
        raise MenuParseError(f"Page document must be an object, got: {type(payload).__name__}")

    menus = payload.get('menus')
    if menus is None:
        raise MenuParseError("Page document has no 'menus' array")
    if not isinstance(menus, list):
        raise MenuParseError("'menus' must be an array")

    pagination = None
    if payload.get('pagination') is not None:
        pagination = parse_pagination(payload['pagination'])

    return MenuPage(
        menus=[parse_menu_record(item) for item in menus],
        pagination=pagination,
    )


# ============================================================================
# Graph Loading
# ============================================================================


def build_graph(records: Iterable[MenuRecord], graph: Optional[MenuGraph] = None) -> MenuGraph:
    """
    Populate a MenuGraph from decoded records.

    Records without a parent become roots. Only records that carry a
    child_ids list get an adjacency entry; a later record for the same id
    overwrites an earlier one.

    Args:
        records: Records in document order
        graph: Optional graph to extend

    Returns:
        The populated graph
    """
    if graph is None:
        graph = MenuGraph()

    for record in records:
        if record.is_root:
            graph.add_root(record.id)
        if record.child_ids is not None:
            graph.add_children(record.id, record.child_ids)

    return graph
