"""Frame selection and ordering for slideshow assembly."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, List

FRAME_TYPE = "FRAME"

Comparator = Callable[[Any, Any], float]


def sort_priority_y(node_a: Any, node_b: Any) -> float:
    """Order top to bottom, then left to right within a row."""
    if node_a.y == node_b.y:
        return node_a.x - node_b.x
    return node_a.y - node_b.y


def sort_priority_x(node_a: Any, node_b: Any) -> float:
    """Order left to right, then top to bottom within a column."""
    if node_a.x == node_b.x:
        return node_a.y - node_b.y
    return node_a.x - node_b.x


COMPARATORS: Dict[str, Comparator] = {
    "y": sort_priority_y,
    "x": sort_priority_x,
}


def resolve_comparator(ordering: str) -> Comparator:
    try:
        return COMPARATORS[ordering.lower()]
    except KeyError as exc:
        raise ValueError(
            f"Unknown ordering '{ordering}'. Expected one of: {', '.join(sorted(COMPARATORS))}"
        ) from exc


def select_frames(
    children: Iterable[Any],
    comparator: Comparator = sort_priority_y,
) -> List[Any]:
    """Return the frame-typed children ordered by ``comparator``.

    Children of any other type are dropped. ``sorted`` is stable, so regions
    with identical coordinates keep their original child order.
    """
    frames = [node for node in children if getattr(node, "type", None) == FRAME_TYPE]
    return sorted(frames, key=cmp_to_key(comparator))


__all__ = [
    "COMPARATORS",
    "FRAME_TYPE",
    "resolve_comparator",
    "select_frames",
    "sort_priority_x",
    "sort_priority_y",
]
