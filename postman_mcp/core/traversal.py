"""
Pure traversal functions over a parsed collection tree.

All traversals walk the tree in document pre-order using an explicit
stack, so nesting depth is unbounded. The root folder stands for the
collection itself: it never appears in results and contributes nothing to
paths. A node's path is its ancestors' names joined with `` / ``.
"""

from typing import List, Literal, Optional, Tuple

from ..models.collection import CollectionNode, Folder, RequestItem
from ..models.views import CollectionStructure, FolderSummary, RequestSummary, SearchResult

TypeFilter = Literal["all", "folder", "request"]

PATH_SEPARATOR = " / "


def join_path(parent_path: str, name: str) -> str:
    return f"{parent_path}{PATH_SEPARATOR}{name}" if parent_path else name


def _children_with_paths(folder: Folder, parent_path: str) -> List[Tuple[CollectionNode, str]]:
    return [(child, join_path(parent_path, child.name)) for child in folder.children]


def search_by_name(root: Folder, query: str, type_filter: TypeFilter = "all") -> List[SearchResult]:
    """
    Find folders and/or requests whose name contains ``query``.

    Matching is a case-insensitive substring test; an empty query matches
    every node of the selected type. Results come back in pre-order, so a
    folder's own match precedes matches among its descendants. Folders are
    always descended into, whether or not they matched.
    """
    needle = query.lower()
    results: List[SearchResult] = []

    stack = list(reversed(_children_with_paths(root, "")))
    while stack:
        node, path = stack.pop()
        matched = needle in node.name.lower()

        if isinstance(node, Folder):
            if matched and type_filter in ("all", "folder"):
                results.append(SearchResult(kind="folder", id=node.id, name=node.name, path=path))
            stack.extend(reversed(_children_with_paths(node, path)))
        elif matched and type_filter in ("all", "request"):
            results.append(
                SearchResult(kind="request", id=node.id, name=node.name, method=node.method, path=path)
            )

    return results


def build_structure(root: Folder) -> CollectionStructure:
    """
    Build the nested folders/requests outline of a collection.

    Child order is preserved at every level. Bodies, headers and
    descriptions are dropped.
    """
    structure = CollectionStructure()

    stack = [
        (node, path, structure)
        for node, path in reversed(_children_with_paths(root, ""))
    ]
    while stack:
        node, path, parent = stack.pop()
        if isinstance(node, Folder):
            summary = FolderSummary(id=node.id, name=node.name, path=path)
            parent.folders.append(summary)
            stack.extend(
                (child, child_path, summary)
                for child, child_path in reversed(_children_with_paths(node, path))
            )
        else:
            parent.requests.append(
                RequestSummary(id=node.id, name=node.name, method=node.method, path=path)
            )

    return structure


def find_by_id(root: Folder, node_id: str) -> Optional[CollectionNode]:
    """
    Return the first node in pre-order whose id equals ``node_id``.

    Ids are assumed unique but this is not checked: with duplicates the
    first one in document order wins. Nodes without an id never match.
    """
    if not node_id:
        return None

    stack: List[CollectionNode] = [root]
    while stack:
        node = stack.pop()
        if node.id is not None and node.id == node_id:
            return node
        if isinstance(node, Folder):
            stack.extend(reversed(node.children))

    return None


def find_request(root: Folder, request_id: str) -> Optional[RequestItem]:
    """Like :func:`find_by_id` but only returns request leaves."""
    node = find_by_id(root, request_id)
    return node if isinstance(node, RequestItem) else None


def count_nodes(root: Folder) -> Tuple[int, int]:
    """Return ``(folders, requests)`` below the root."""
    folders = requests = 0
    stack: List[CollectionNode] = list(root.children)
    while stack:
        node = stack.pop()
        if isinstance(node, Folder):
            folders += 1
            stack.extend(node.children)
        else:
            requests += 1
    return folders, requests
