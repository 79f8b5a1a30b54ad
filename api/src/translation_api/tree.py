"""Pure operations over translation trees.

A translation tree is a plain ``dict`` whose leaves are strings. Drivers
return nested trees, while writers take dotted keys; ``flatten`` and
``unflatten`` are the only two transforms used to cross that boundary.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

Tree = Dict[str, Any]

SEPARATOR = "."
NAMESPACE_SEPARATOR = "::"


def flatten(tree: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Collapse a nested tree into ``{"a.b.c": leaf}``.

    Empty nested mappings disappear, so ``unflatten(flatten(t))`` drops them.
    """
    result: Dict[str, Any] = {}
    for key, value in tree.items():
        path = f"{prefix}{key}"
        if isinstance(value, Mapping):
            result.update(flatten(value, path + SEPARATOR))
        else:
            result[path] = value
    return result


def set_dotted(tree: Tree, path: str, value: Any) -> Tree:
    """Set ``value`` at a dotted ``path``, creating intermediate dicts.

    A string sitting where a dict is needed is replaced by a dict.
    """
    segments = path.split(SEPARATOR)
    node = tree
    for segment in segments[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child
    node[segments[-1]] = value
    return tree


def get_dotted(tree: Mapping[str, Any], path: str, default: Any = None) -> Any:
    node: Any = tree
    for segment in path.split(SEPARATOR):
        if not isinstance(node, Mapping) or segment not in node:
            return default
        node = node[segment]
    return node


def unflatten(flat: Mapping[str, Any], sort_keys: bool = False) -> Tree:
    """Expand dotted keys into nested dicts; the inverse of ``flatten``."""
    tree: Tree = {}
    keys = sorted(flat) if sort_keys else list(flat)
    for key in keys:
        set_dotted(tree, key, flat[key])
    return sort_tree(tree) if sort_keys else tree


def sort_tree(tree: Mapping[str, Any]) -> Tree:
    """Copy ``tree`` with keys sorted ascending at every level."""
    return {
        key: sort_tree(value) if isinstance(value, Mapping) else value
        for key, value in sorted(tree.items(), key=lambda item: str(item[0]))
    }


def find_missing(expected: Mapping[str, Any], actual: Mapping[str, Any]) -> Tree:
    """Return the part of ``expected`` whose paths are absent from ``actual``.

    Only presence matters: an empty-string value in ``actual`` counts as
    present. Subtrees left empty after the difference are dropped.
    """
    missing: Tree = {}
    for key, value in expected.items():
        if key not in actual:
            missing[key] = value
            continue
        other = actual[key]
        if isinstance(value, Mapping):
            if isinstance(other, Mapping):
                nested = find_missing(value, other)
                if nested:
                    missing[key] = nested
            else:
                # a leaf where a subtree is expected: every nested key is absent
                missing[key] = value
    return missing


def parse_group(name: str) -> Tuple[Optional[str], str]:
    """Split ``"vendor::group"`` into ``("vendor", "group")``."""
    if NAMESPACE_SEPARATOR in name:
        namespace, group = name.split(NAMESPACE_SEPARATOR, 1)
        return namespace, group
    return None, name


def join_group(namespace: Optional[str], group: str) -> str:
    return f"{namespace}{NAMESPACE_SEPARATOR}{group}" if namespace else group


def is_single_group(name: Optional[str]) -> bool:
    return name is None or "single" in name


def strs_contain(values: Iterable[Optional[str]], needle: str) -> bool:
    """True when any non-null value contains ``needle`` (case-sensitive)."""
    return any(needle in str(value) for value in values if value is not None)
