"""
Load and save canvas documents as JSON.

A document is a list of pages, each holding a tree of tagged regions::

    {
      "current_page": 0,
      "pages": [
        {"name": "Deck", "children": [
          {"type": "FRAME", "name": "Intro", "x": 0, "y": 0,
           "width": 640, "height": 360, "fill": "#1E90FF",
           "children": [{"type": "RECTANGLE", "x": 20, "y": 20,
                         "width": 100, "height": 40, "fill": "#FFFFFF"}]}
        ]}
      ]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional

from frame_slideshow.canvas import CanvasHost, Node
from frame_slideshow.errors import DocumentError


def _parse_number(raw: Mapping[str, Any], key: str, default: float = 0.0) -> float:
    value = raw.get(key, default)
    if isinstance(value, bool):
        raise DocumentError(f"Field '{key}' must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise DocumentError(f"Field '{key}' must be a number, got {value!r}") from exc


def _optional_id(raw: Mapping[str, Any]) -> Optional[str]:
    node_id = raw.get("id")
    return str(node_id) if node_id is not None else None


def _new_node(host: CanvasHost, node_type: str, name: str, raw: Mapping[str, Any]) -> Node:
    try:
        return host.new_node(node_type, name, _optional_id(raw))
    except ValueError as exc:
        raise DocumentError(str(exc)) from exc


def _load_node(host: CanvasHost, raw: Any, parent: Node) -> Node:
    if not isinstance(raw, Mapping):
        raise DocumentError(f"Expected an object for a child of '{parent.name}', got {type(raw).__name__}")

    node_type = str(raw.get("type", "FRAME")).strip().upper()
    node = _new_node(host, node_type, str(raw.get("name", "")), raw)
    node.set_position(_parse_number(raw, "x"), _parse_number(raw, "y"))

    width = _parse_number(raw, "width")
    height = _parse_number(raw, "height")
    if width <= 0 or height <= 0:
        raise DocumentError(f"Region '{node.name or node.id}' must have a positive size, got {width}x{height}")
    node.resize(width, height)

    node.fill_color = raw.get("fill")
    node.clips_content = bool(raw.get("clips_content", False))

    for child in raw.get("children") or []:
        _load_node(host, child, node)

    parent.append_child(node)
    return node


def _explicit_ids(raw_nodes: Any) -> Iterator[str]:
    if not isinstance(raw_nodes, list):
        return
    for raw in raw_nodes:
        if not isinstance(raw, Mapping):
            continue
        node_id = _optional_id(raw)
        if node_id is not None:
            yield node_id
        yield from _explicit_ids(raw.get("children"))


def document_from_dict(data: Mapping[str, Any], host: Optional[CanvasHost] = None) -> CanvasHost:
    """Populate ``host`` (or a new :class:`CanvasHost`) from parsed JSON."""
    if not isinstance(data, Mapping):
        raise DocumentError("Document root must be a JSON object")

    target = host or CanvasHost()
    pages = data.get("pages")
    if pages is None and "children" in data:
        pages = [{"name": data.get("name", "Page 1"), "children": data["children"]}]
    if not isinstance(pages, list) or not pages:
        raise DocumentError("Document must contain a non-empty 'pages' list")

    target.reserve_ids(_explicit_ids(pages))
    loaded = []
    for index, raw_page in enumerate(pages):
        if not isinstance(raw_page, Mapping):
            raise DocumentError(f"Page {index} must be an object")
        page = target.add_page(str(raw_page.get("name") or f"Page {index + 1}"), _optional_id(raw_page))
        for child in raw_page.get("children") or []:
            _load_node(target, child, page)
        loaded.append(page)

    current = data.get("current_page", 0)
    if not isinstance(current, int) or isinstance(current, bool) or not 0 <= current < len(loaded):
        raise DocumentError(f"current_page must be an index between 0 and {len(loaded) - 1}")
    target.set_active_container(loaded[current])
    return target


def load_document(path: Path | str, host: Optional[CanvasHost] = None) -> CanvasHost:
    document_path = Path(path)
    if not document_path.is_file():
        raise DocumentError(f"Document {document_path} does not exist")
    try:
        with document_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise DocumentError(f"{document_path} is not valid JSON: {exc}") from exc
    return document_from_dict(data, host)


def dump_document(host: CanvasHost) -> Dict[str, Any]:
    current = host.current_page()
    current_index = next(index for index, page in enumerate(host.pages) if page is current)
    return {
        "current_page": current_index,
        "pages": [page.as_dict() for page in host.pages],
    }


def write_document(host: CanvasHost, path: Path | str) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as handle:
        json.dump(dump_document(host), handle, indent=2)
    return output_path


__all__ = ["document_from_dict", "dump_document", "load_document", "write_document"]
