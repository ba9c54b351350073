"""Walk arbitrary JSON-shaped data for text fields.

Structured data embedded in pages (JSON-LD, framework hydration blobs) has no
fixed shape, so extraction walks the whole tree: objects, arrays and scalars.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Optional

MAX_DEPTH = 12

_BODY_KEY_RE = re.compile(r"body|content|description|summary|text", re.IGNORECASE)


def is_body_key(key: Any) -> bool:
    return isinstance(key, str) and bool(_BODY_KEY_RE.search(key))


def walk_strings(
    node: Any,
    key_predicate: Callable[[Any], bool] = is_body_key,
    max_depth: int = MAX_DEPTH,
) -> list[str]:
    """Collect string values stored under keys accepted by `key_predicate`.

    Arrays inherit the match of the key that holds them, so a list of strings
    under `articleBody` is collected. Nodes deeper than `max_depth` are ignored.
    """
    results: list[str] = []
    _walk(node, key_predicate, max_depth, 0, False, results)
    return results


def _walk(node: Any, key_predicate, max_depth: int, depth: int, matched: bool, results: list[str]) -> None:
    if depth > max_depth:
        return
    if isinstance(node, str):
        if matched and node.strip():
            results.append(node)
    elif isinstance(node, dict):
        for key, value in node.items():
            _walk(value, key_predicate, max_depth, depth + 1, key_predicate(key), results)
    elif isinstance(node, list):
        for item in node:
            _walk(item, key_predicate, max_depth, depth + 1, matched, results)


def find_first(node: Any, keys: tuple[str, ...], max_depth: int = MAX_DEPTH) -> Optional[str]:
    """Breadth-first search for the first non-empty string under any of `keys`."""
    queue: list[tuple[Any, int]] = [(node, 0)]
    while queue:
        current, depth = queue.pop(0)
        if depth > max_depth:
            continue
        if isinstance(current, dict):
            for key in keys:
                value = current.get(key)
                if isinstance(value, str) and value.strip():
                    return value.strip()
            queue.extend((v, depth + 1) for v in current.values() if isinstance(v, (dict, list)))
        elif isinstance(current, list):
            queue.extend((v, depth + 1) for v in current if isinstance(v, (dict, list)))
    return None
