"""
Category tree operations.

The child list of a category is the reverse relation of `parent`, so it is
always exactly the set of categories pointing at it. Deletion does not
cascade: descendants and videos keep the deleted id.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Count, QuerySet
from django.utils import timezone

from ..exceptions import CategoryNotFound, DuplicateName, MissingFields, ParentNotFound
from ..models import Category, Video

logger = logging.getLogger(__name__)


@dataclass
class TreeNode:
    id: int
    name: str
    description: Optional[str]
    image_url: Optional[str]
    parent_id: Optional[int]
    direct_video_count: int = 0
    total_video_count: int = 0
    truncated: bool = False
    children: List["TreeNode"] = field(default_factory=list)


def _touch(category_id: Optional[int]) -> None:
    """Mark a category as updated when its child set changes."""
    if category_id is not None:
        Category.objects.filter(pk=category_id).update(updated_at=timezone.now())


def get_category(category_id) -> Category:
    try:
        return Category.objects.get(pk=category_id)
    except Category.DoesNotExist:
        raise CategoryNotFound()


def create_category(
    *,
    name: str,
    description: Optional[str] = None,
    image_url: Optional[str] = None,
    parent_id: Optional[int] = None,
) -> Category:
    """
    Create a root category, or a subcategory when `parent_id` is given.

    Raises:
        MissingFields: empty name.
        DuplicateName: name already used anywhere in the forest.
        ParentNotFound: `parent_id` does not exist.
    """
    name = (name or "").strip()
    if not name:
        raise MissingFields("Category name is required.")

    if Category.objects.filter(name=name).exists():
        raise DuplicateName()

    if parent_id is not None and not Category.objects.filter(pk=parent_id).exists():
        raise ParentNotFound()

    try:
        with transaction.atomic():
            category = Category.objects.create(
                name=name,
                description=description,
                image_url=image_url,
                parent_id=parent_id,
            )
            _touch(parent_id)
    except IntegrityError as e:
        raise DuplicateName() from e

    logger.info("Category %s created (parent=%s)", category.pk, parent_id)
    return category


def delete_category(category_id) -> None:
    """
    Delete one category. Descendants and attached videos are left untouched
    and keep referencing the deleted id.
    """
    category = get_category(category_id)
    parent_id = category.parent_id

    with transaction.atomic():
        category.delete()
        _touch(parent_id)

    logger.info("Category %s deleted (parent=%s)", category_id, parent_id)


def list_roots() -> QuerySet:
    return Category.objects.filter(parent_id__isnull=True)


def list_children(parent_id):
    """Return (parent, children); NotFound if the parent does not exist."""
    parent = get_category(parent_id)
    return parent, Category.objects.filter(parent_id=parent.pk)


def leaf_categories() -> QuerySet:
    """Categories that no other category names as its parent."""
    parent_ids = (
        Category.objects.filter(parent_id__isnull=False)
        .order_by()
        .values("parent_id")
    )
    return Category.objects.exclude(pk__in=parent_ids)


def search_categories(query: str) -> QuerySet:
    return Category.objects.filter(name__icontains=query)


# ----------------------------
# Nested tree assembly
# ----------------------------
def _load_arena():
    """All categories by id, with direct video counts and child ids."""
    arena: Dict[int, dict] = {
        row["id"]: row
        for row in Category.objects.values(
            "id", "name", "description", "image_url", "parent_id"
        )
    }

    direct_counts = dict(
        Video.objects.filter(category_id__isnull=False)
        .order_by()
        .values("category_id")
        .annotate(n=Count("id"))
        .values_list("category_id", "n")
    )

    children_of: Dict[int, List[int]] = defaultdict(list)
    for row in arena.values():
        if row["parent_id"] is not None:
            children_of[row["parent_id"]].append(row["id"])

    return arena, direct_counts, children_of


def _assemble(start_id: int, arena, direct_counts, children_of, max_depth: int) -> TreeNode:
    """
    Build the subtree below `start_id` without recursion.

    A visited set stops cycles; nodes at `max_depth` are returned with
    `truncated=True` and no children.
    """

    def make(node_id: int) -> TreeNode:
        row = arena[node_id]
        return TreeNode(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            image_url=row["image_url"],
            parent_id=row["parent_id"],
            direct_video_count=direct_counts.get(node_id, 0),
        )

    root = make(start_id)
    visited = {start_id}
    order = [root]
    stack = [(root, 0)]

    while stack:
        node, depth = stack.pop()
        child_ids = children_of.get(node.id, [])
        if child_ids and depth >= max_depth:
            logger.warning("Category tree truncated at %s (depth %s)", node.id, depth)
            node.truncated = True
            continue

        for child_id in child_ids:
            if child_id in visited:
                logger.warning("Category cycle detected at %s → %s", node.id, child_id)
                continue
            visited.add(child_id)
            child = make(child_id)
            node.children.append(child)
            order.append(child)
            stack.append((child, depth + 1))

    # Children always follow their parent in `order`.
    for node in reversed(order):
        node.total_video_count = node.direct_video_count + sum(
            child.total_video_count for child in node.children
        )
    return root


def build_nested_tree(root_id=None, max_depth: Optional[int] = None) -> List[TreeNode]:
    """
    Nested tree(s) annotated with direct and total (subtree) video counts.

    With `root_id` the result holds that single subtree; otherwise one tree
    per root category.
    """
    max_depth = max_depth if max_depth is not None else settings.CATEGORY_TREE_MAX_DEPTH
    arena, direct_counts, children_of = _load_arena()

    if root_id is not None:
        root_id = int(root_id)
        if root_id not in arena:
            raise CategoryNotFound()
        start_ids = [root_id]
    else:
        start_ids = [row["id"] for row in arena.values() if row["parent_id"] is None]

    return [
        _assemble(start_id, arena, direct_counts, children_of, max_depth)
        for start_id in start_ids
    ]
