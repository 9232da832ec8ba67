"""Nested folder view of user labels with unread counts."""

from typing import Any


def _new_node(label_id: str, full_path: str, count: int, is_leaf: bool) -> dict[str, Any]:
    parts = full_path.split("/")
    return {
        "label_id": label_id,
        "name": parts[-1],
        "full_path": full_path,
        "count": count,
        "is_leaf": is_leaf,
        "depth": len(parts) - 1,
        "children": [],
    }


def _sort_by_count(nodes: list[dict[str, Any]]) -> list[dict[str, Any]]:
    nodes.sort(key=lambda n: n["count"], reverse=True)
    for node in nodes:
        _sort_by_count(node["children"])
    return nodes


def build_label_tree(
    label_names: dict[str, str],
    unread_counts: dict[str, int],
    top_n: int | None = None,
) -> list[dict[str, Any]]:
    """
    Arrange counted labels into a folder tree using "/" in label names.

    Every counted label with a known name becomes a node. Missing parent
    folders are created with an empty label id. A parent's count includes
    the counts of its children.

    Args:
        label_names: Mapping of label id to name (e.g. "Work/Clients/Acme").
        unread_counts: Unread thread count per label id.
        top_n: Keep only this many root folders.

    Returns:
        Root nodes sorted by count, highest first, each with nested children.
    """
    by_path: dict[str, dict[str, Any]] = {}

    for label_id, count in unread_counts.items():
        name = label_names.get(label_id)
        if name:
            by_path[name] = _new_node(label_id, name, count, is_leaf=True)

    for path in list(by_path):
        parts = path.split("/")
        for i in range(1, len(parts)):
            parent_path = "/".join(parts[:i])
            if parent_path not in by_path:
                by_path[parent_path] = _new_node("", parent_path, 0, is_leaf=False)

    # Deepest first so counts roll up through every level
    roots = []
    for node in sorted(by_path.values(), key=lambda n: n["depth"], reverse=True):
        if node["depth"] == 0:
            roots.append(node)
            continue
        parent = by_path[node["full_path"].rsplit("/", 1)[0]]
        parent["children"].append(node)
        parent["is_leaf"] = False
        parent["count"] += node["count"]

    roots = _sort_by_count(roots)
    if top_n is not None:
        roots = roots[:top_n]
    return roots


def flatten_label_tree(nodes: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Depth-first list of nodes, handy for tables."""
    flat = []
    for node in nodes:
        flat.append(node)
        flat.extend(flatten_label_tree(node["children"]))
    return flat
