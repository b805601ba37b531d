"""
Category hierarchy helpers.

Categories are stored flat, each row pointing at its parent through
``parent_id``. The functions here turn such rows into a sorted tree, walk
ancestor chains for breadcrumbs and derive slugs for new rows. They accept
ORM rows, pydantic models or plain dicts and never touch storage.
"""
import hashlib
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set

from app.schemas.category import CategoryNode

logger = logging.getLogger(__name__)

SLUG_FALLBACK_PREFIX = "category"

_WHITESPACE = re.compile(r"\s+")
_NOT_SLUG = re.compile(r"[^a-z0-9-]")
_HYPHENS = re.compile(r"-+")

class CategoryError(ValueError):
    """Base error for malformed category hierarchies."""

class CategoryCycleError(CategoryError):
    """Raised when a parent chain loops back on itself."""

    def __init__(self, category_id: str):
        self.category_id = category_id
        super().__init__(f"Cycle detected in parent chain at category {category_id!r}")

def _get(record: Any, field: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(field, default)
    return getattr(record, field, default)

def create_slug(name: str) -> str:
    """
    Build a URL-safe slug from a display name.

    Non-ASCII letters are dropped rather than transliterated. A name with
    nothing left after stripping gets ``category-<hash>`` so the result is
    never empty and stays stable for the same input.
    """
    slug = _WHITESPACE.sub("-", name.lower().strip())
    slug = _NOT_SLUG.sub("", slug)
    slug = _HYPHENS.sub("-", slug).strip("-")
    if not slug:
        digest = hashlib.sha1(name.encode("utf-8")).hexdigest()[:8]
        slug = f"{SLUG_FALLBACK_PREFIX}-{digest}"
    return slug

def generate_unique_slug(name: str, existing_slugs: Iterable[str]) -> str:
    """Slug for ``name`` that does not appear in ``existing_slugs``."""
    taken = set(existing_slugs)
    base = create_slug(name)
    slug = base
    counter = 1
    while slug in taken:
        slug = f"{base}-{counter}"
        counter += 1
    return slug

def _to_node(record: Any, product_counts: Optional[Mapping[str, int]]) -> CategoryNode:
    category_id = _get(record, "id")
    is_active = _get(record, "is_active")
    return CategoryNode(
        id=category_id,
        name=_get(record, "name"),
        slug=_get(record, "slug"),
        description=_get(record, "description") or None,
        parent_id=_get(record, "parent_id") or None,
        level=_get(record, "level") or 0,
        sort_order=_get(record, "sort_order") or 0,
        is_active=True if is_active is None else is_active,
        image=_get(record, "image") or None,
        children=[],
        product_count=product_counts.get(category_id) if product_counts is not None else None,
    )

def build_category_tree(
    categories: Iterable[Any],
    product_counts: Optional[Mapping[str, int]] = None,
) -> List[CategoryNode]:
    """
    Nest flat category rows under their parents.

    Returns the root nodes. Every level is ordered by ``sort_order``; the sort
    is stable so siblings with equal keys keep their input order. Rows whose
    parent is missing are left out, as are rows caught in a parent cycle
    (they can never be reached from a root).
    """
    categories = list(categories)
    nodes: Dict[str, CategoryNode] = {}
    for record in categories:
        node = _to_node(record, product_counts)
        nodes[node.id] = node

    roots: List[CategoryNode] = []
    for record in categories:
        node = nodes[_get(record, "id")]
        if node.parent_id:
            parent = nodes.get(node.parent_id)
            if parent is not None:
                parent.children.append(node)
            else:
                logger.debug(f"Dropping category {node.id}: parent {node.parent_id} not found")
        else:
            roots.append(node)

    visited: Set[str] = set()

    def sort_level(level_nodes: List[CategoryNode]) -> None:
        level_nodes.sort(key=lambda n: n.sort_order)
        for n in level_nodes:
            if n.id in visited:
                continue
            visited.add(n.id)
            if n.children:
                sort_level(n.children)

    sort_level(roots)

    unreachable = len(nodes) - len(visited)
    if unreachable:
        logger.debug(f"{unreachable} categories are not reachable from a root")
    return roots

def flatten_category_tree(nodes: Sequence[CategoryNode]) -> List[CategoryNode]:
    """Depth-first, pre-order listing of a built tree."""
    flat: List[CategoryNode] = []
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        flat.append(node)
        stack.extend(reversed(node.children))
    return flat

def get_category_path(categories: Sequence[Any], category_id: str) -> List[Any]:
    """
    Breadcrumb for ``category_id``: the root first, the category itself last.

    Unknown ids give an empty list. Raises CategoryCycleError if the parent
    chain revisits a category.
    """
    by_id = {_get(cat, "id"): cat for cat in categories}
    path: List[Any] = []
    seen: Set[str] = set()
    current = by_id.get(category_id)
    while current is not None:
        current_id = _get(current, "id")
        if current_id in seen:
            raise CategoryCycleError(current_id)
        seen.add(current_id)
        path.append(current)
        parent_id = _get(current, "parent_id")
        current = by_id.get(parent_id) if parent_id else None
    path.reverse()
    return path

def get_child_count(categories: Iterable[Any], category_id: str) -> int:
    return sum(1 for cat in categories if _get(cat, "parent_id") == category_id)

def calculate_level(categories: Iterable[Any], parent_id: Optional[str] = None) -> int:
    """
    Depth of a new child of ``parent_id``.

    Uses the parent's stored ``level`` instead of walking to the root, so
    writers must keep ``level`` consistent when categories move.
    """
    if not parent_id:
        return 0
    for cat in categories:
        if _get(cat, "id") == parent_id:
            return (_get(cat, "level") or 0) + 1
    return 0

def next_sort_order(categories: Iterable[Any], parent_id: Optional[str] = None) -> int:
    """One past the highest ``sort_order`` among the children of ``parent_id``."""
    parent_id = parent_id or None
    orders = [
        _get(cat, "sort_order") or 0
        for cat in categories
        if (_get(cat, "parent_id") or None) == parent_id
    ]
    return max(orders, default=0) + 1

def would_create_cycle(
    categories: Iterable[Any], category_id: str, new_parent_id: Optional[str]
) -> bool:
    """True if moving ``category_id`` under ``new_parent_id`` makes it its own ancestor."""
    if not new_parent_id:
        return False
    parents = {_get(cat, "id"): _get(cat, "parent_id") for cat in categories}
    seen: Set[str] = set()
    current: Optional[str] = new_parent_id
    while current and current not in seen:
        if current == category_id:
            return True
        seen.add(current)
        current = parents.get(current)
    return False

def get_descendant_ids(categories: Iterable[Any], category_id: str) -> List[str]:
    """Ids below ``category_id``, breadth first."""
    children: Dict[str, List[str]] = {}
    for cat in categories:
        parent_id = _get(cat, "parent_id")
        if parent_id:
            children.setdefault(parent_id, []).append(_get(cat, "id"))

    found: List[str] = []
    seen = {category_id}
    queue = list(children.get(category_id, []))
    while queue:
        child_id = queue.pop(0)
        if child_id in seen:
            continue
        seen.add(child_id)
        found.append(child_id)
        queue.extend(children.get(child_id, []))
    return found
