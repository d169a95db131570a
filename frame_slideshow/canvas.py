"""In-memory canvas document implementing the slideshow host capabilities."""

from __future__ import annotations

import asyncio
import logging
from hashlib import sha256
from typing import Any, Dict, Iterable, Iterator, List, Optional, Protocol, Sequence, Set

import cv2
import numpy as np

from frame_slideshow.errors import LinkResolutionFailure
from frame_slideshow.exporters import FillExporter
from frame_slideshow.host import MessageChannel, SlideshowHost
from frame_slideshow.models import EntryPoint, ImageFill, Reaction

LOGGER = logging.getLogger(__name__)


class RegionExporter(Protocol):
    def export(self, region: "Node") -> bytes:
        ...


class Node:
    """A canvas element: page, frame, rectangle or any other tagged region."""

    def __init__(self, node_id: str, node_type: str, name: str = "") -> None:
        self.id = node_id
        self.type = node_type
        self.name = name
        self.x: float = 0.0
        self.y: float = 0.0
        self.width: float = 0.0
        self.height: float = 0.0
        self.clips_content = False
        self.fill_color: Any = None
        self.fills: List[ImageFill] = []
        self.children: List["Node"] = []
        self.parent: Optional["Node"] = None
        self.reactions: List[Reaction] = []
        self.flow_starting_points: List[EntryPoint] = []

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, type={self.type!r}, name={self.name!r})"

    def set_position(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def resize(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Cannot resize {self.name or self.id} to {width}x{height}")
        self.width = width
        self.height = height

    def set_fill(self, fill: ImageFill) -> None:
        self.fills = [fill]

    def append_child(self, child: "Node") -> None:
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)

    def walk(self) -> Iterator["Node"]:
        for child in self.children:
            yield child
            yield from child.walk()

    def find_child(self, node_id: str) -> Optional["Node"]:
        for node in self.walk():
            if node.id == node_id:
                return node
        return None

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "type": self.type, "name": self.name}
        if self.type != "PAGE":
            data.update({"x": self.x, "y": self.y, "width": self.width, "height": self.height})
        if self.clips_content:
            data["clips_content"] = True
        if self.fill_color is not None:
            data["fill"] = self.fill_color
        if self.fills:
            data["fills"] = [fill.as_dict() for fill in self.fills]
        if self.reactions:
            data["reactions"] = [reaction.as_dict() for reaction in self.reactions]
        if self.flow_starting_points:
            data["flow_starting_points"] = [entry.as_dict() for entry in self.flow_starting_points]
        if self.children:
            data["children"] = [child.as_dict() for child in self.children]
        return data


def reencode_png(payload: bytes) -> bytes:
    """Decode raster bytes and return them as a PNG image."""
    image = cv2.imdecode(np.frombuffer(payload, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ValueError(f"Received {len(payload)} bytes that do not decode as an image")
    success, buffer = cv2.imencode(".png", image)
    if not success:
        raise RuntimeError("Failed to encode image as PNG")
    return buffer.tobytes()


class CanvasHost(SlideshowHost):
    """Document host backed by plain Python objects."""

    def __init__(
        self,
        exporter: Optional[RegionExporter] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.exporter = exporter or FillExporter()
        self.logger = logger or LOGGER
        self.pages: List[Node] = []
        self.images: Dict[str, bytes] = {}
        self._current: Optional[Node] = None
        self._next_id = 1
        self._node_ids: Set[str] = set()
        self._reserved_ids: Set[str] = set()
        self._channel: Optional[MessageChannel] = None
        self.closed = False
        self.close_message: Optional[str] = None

    # ------------------------------------------------------------------
    # Document helpers
    # ------------------------------------------------------------------

    def new_node(self, node_type: str, name: str = "", node_id: Optional[str] = None) -> Node:
        if node_id is None:
            taken = self._node_ids | self._reserved_ids
            while f"1:{self._next_id}" in taken:
                self._next_id += 1
            node_id = f"1:{self._next_id}"
        elif node_id in self._node_ids:
            raise ValueError(f"Duplicate node id {node_id}")
        self._node_ids.add(node_id)
        return Node(node_id, node_type, name)

    def reserve_ids(self, node_ids: Iterable[str]) -> None:
        """Keep generated ids clear of ids that will be assigned explicitly later."""
        self._reserved_ids.update(node_ids)

    def add_page(self, name: str = "", node_id: Optional[str] = None) -> Node:
        page = self.new_node("PAGE", name, node_id)
        self.pages.append(page)
        if self._current is None:
            self._current = page
        return page

    def find_node(self, node_id: str) -> Optional[Node]:
        for page in self.pages:
            if page.id == node_id:
                return page
            found = page.find_child(node_id)
            if found is not None:
                return found
        return None

    def get_image(self, image_hash: str) -> bytes:
        try:
            return self.images[image_hash]
        except KeyError as exc:
            raise KeyError(f"Unknown image asset {image_hash}") from exc

    # ------------------------------------------------------------------
    # Host capabilities
    # ------------------------------------------------------------------

    def current_page(self) -> Node:
        if self._current is None:
            self._current = self.add_page("Page 1")
        return self._current

    async def export_region_as_image_bytes(self, region: Node) -> bytes:
        return await asyncio.to_thread(self.exporter.export, region)

    def register_image_asset(self, data: bytes) -> str:
        image_hash = sha256(data).hexdigest()
        self.images[image_hash] = bytes(data)
        return image_hash

    def create_container(self) -> Node:
        return self.new_node("FRAME", "Frame")

    def create_rectangle(self) -> Node:
        return self.new_node("RECTANGLE", "Rectangle")

    def create_page(self) -> Node:
        return self.add_page(f"Page {len(self.pages) + 1}")

    def set_active_container(self, page: Node) -> None:
        if all(page is not existing for existing in self.pages):
            raise ValueError(f"{page!r} is not a page of this document")
        self._current = page

    def _require_on_active_page(self, node_id: str) -> None:
        if self.current_page().find_child(node_id) is None:
            raise LinkResolutionFailure(
                f"Node {node_id} is not on the active page {self.current_page().name!r}"
            )

    def set_entry_points(self, container: Node, entry_points: Sequence[EntryPoint]) -> None:
        for entry in entry_points:
            if container.find_child(entry.node_id) is None:
                raise LinkResolutionFailure(f"Entry point {entry.node_id} is not inside {container!r}")
        container.flow_starting_points = list(entry_points)

    def set_transitions(self, node: Node, reactions: Sequence[Reaction]) -> None:
        for reaction in reactions:
            self._require_on_active_page(reaction.action.destination_id)
        node.reactions = list(reactions)

    def show_ui(self) -> MessageChannel:
        if self._channel is None:
            self._channel = MessageChannel(reencode_png, logger=self.logger)
        return self._channel

    def close(self, message: Optional[str] = None) -> None:
        self.closed = True
        self.close_message = message
        if message:
            self.logger.info("Host closed: %s", message)


__all__ = ["CanvasHost", "Node", "RegionExporter", "reencode_png"]
