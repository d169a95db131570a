"""Data models shared by the slideshow assembly pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Slide:
    """Geometry and rasterized image of one source frame."""

    x: float
    y: float
    width: float
    height: float
    image_bytes: bytes = field(repr=False)


@dataclass(frozen=True)
class ImageFill:
    """Image paint referencing a registered image asset."""

    image_hash: str
    scale_mode: str = "CROP"

    def as_dict(self) -> Dict[str, Any]:
        return {"type": "IMAGE", "scale_mode": self.scale_mode, "image_hash": self.image_hash}


class PreviewRole(Enum):
    """Position of a preview relative to the slide that contains it."""

    NEXT = 1
    CURRENT = 0
    PREVIOUS = -1

    @property
    def offset(self) -> int:
        return self.value


@dataclass
class PreviewElement:
    role: PreviewRole
    source_index: int
    node: Any


@dataclass
class ComposedSlide:
    """Output container for one slide and the image elements placed inside it."""

    index: int
    node: Any
    elements: List[PreviewElement] = field(default_factory=list)

    def element_for(self, role: PreviewRole) -> Optional[PreviewElement]:
        for element in self.elements:
            if element.role is role:
                return element
        return None

    def preview_children(self) -> List[PreviewElement]:
        """Elements showing an adjacent slide (everything but the current image)."""
        return [element for element in self.elements if element.role is not PreviewRole.CURRENT]


@dataclass(frozen=True)
class Trigger:
    type: str = "ON_CLICK"

    def as_dict(self) -> Dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True)
class Easing:
    type: str = "EASE_OUT"

    def as_dict(self) -> Dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True)
class TransitionSpec:
    type: str = "SMART_ANIMATE"
    easing: Easing = field(default_factory=Easing)
    duration: float = 1.0

    def as_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "easing": self.easing.as_dict(), "duration": self.duration}


@dataclass(frozen=True)
class NavigateAction:
    destination_id: str
    navigation: str = "NAVIGATE"
    preserve_scroll_position: bool = False
    transition: TransitionSpec = field(default_factory=TransitionSpec)
    type: str = "NODE"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "destination_id": self.destination_id,
            "navigation": self.navigation,
            "preserve_scroll_position": self.preserve_scroll_position,
            "transition": self.transition.as_dict(),
        }


@dataclass(frozen=True)
class Reaction:
    """One interaction edge: a trigger paired with the action it fires."""

    trigger: Trigger
    action: NavigateAction

    def as_dict(self) -> Dict[str, Any]:
        return {"trigger": self.trigger.as_dict(), "action": self.action.as_dict()}


@dataclass(frozen=True)
class EntryPoint:
    node_id: str
    name: str

    def as_dict(self) -> Dict[str, Any]:
        return {"node_id": self.node_id, "name": self.name}


@dataclass(frozen=True)
class NavigationEdge:
    source: ComposedSlide
    destination: ComposedSlide
    reaction: Reaction


@dataclass
class NavigationGraph:
    """Forward chain of composed slides with a single designated entry point."""

    page: Any = None
    slides: List[ComposedSlide] = field(default_factory=list)
    entry_points: List[EntryPoint] = field(default_factory=list)
    edges: List[NavigationEdge] = field(default_factory=list)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def start(self) -> Optional[ComposedSlide]:
        return self.slides[0] if self.slides else None

    def successor(self, slide: ComposedSlide) -> Optional[ComposedSlide]:
        for edge in self.edges:
            if edge.source is slide:
                return edge.destination
        return None

    def walk(self) -> List[ComposedSlide]:
        """Follow edges from the start node until the terminal slide."""
        visited: List[ComposedSlide] = []
        current = self.start
        while current is not None and all(current is not seen for seen in visited):
            visited.append(current)
            current = self.successor(current)
        return visited

    def as_dict(self) -> Dict[str, Any]:
        return {
            "page": getattr(self.page, "id", None),
            "slides": [getattr(slide.node, "id", None) for slide in self.slides],
            "entry_points": [entry.as_dict() for entry in self.entry_points],
            "edges": [
                {
                    "source": getattr(edge.source.node, "id", None),
                    "destination": getattr(edge.destination.node, "id", None),
                    "reaction": edge.reaction.as_dict(),
                }
                for edge in self.edges
            ],
        }


__all__ = [
    "ComposedSlide",
    "Easing",
    "EntryPoint",
    "ImageFill",
    "NavigateAction",
    "NavigationEdge",
    "NavigationGraph",
    "PreviewElement",
    "PreviewRole",
    "Reaction",
    "Slide",
    "TransitionSpec",
    "Trigger",
]
