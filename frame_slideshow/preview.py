"""Render composed slides to PNG files for a quick visual check."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple

import cv2
import numpy as np

from frame_slideshow.canvas import CanvasHost
from frame_slideshow.models import NavigationGraph

LOGGER = logging.getLogger(__name__)


def _decode_fill(host: CanvasHost, node: Any) -> Optional[np.ndarray]:
    if not node.fills:
        return None
    data = host.get_image(node.fills[0].image_hash)
    image = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError(f"Image asset for {node.name} could not be decoded")
    return image


def render_slide_preview(
    host: CanvasHost,
    container: Any,
    *,
    background_color: Tuple[int, int, int] = (255, 255, 255),
) -> np.ndarray:
    """Paint ``container``'s image children in order, clipped to its bounds."""
    width = max(1, int(round(container.width)))
    height = max(1, int(round(container.height)))
    canvas = np.full((height, width, 3), background_color, dtype=np.uint8)

    for child in container.children:
        image = _decode_fill(host, child)
        if image is None:
            continue

        child_width = max(1, int(round(child.width)))
        child_height = max(1, int(round(child.height)))
        resized = cv2.resize(image, (child_width, child_height), interpolation=cv2.INTER_AREA)

        x0 = int(round(child.x))
        y0 = int(round(child.y))
        left, top = max(0, x0), max(0, y0)
        right = min(width, x0 + child_width)
        bottom = min(height, y0 + child_height)
        if right <= left or bottom <= top:
            continue
        canvas[top:bottom, left:right] = resized[top - y0:bottom - y0, left - x0:right - x0]

    return canvas


def write_previews(host: CanvasHost, graph: NavigationGraph, output_dir: Path) -> List[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for slide in graph.slides:
        frame = render_slide_preview(host, slide.node)
        success, buffer = cv2.imencode(".png", frame)
        if not success:
            raise RuntimeError(f"Failed to encode preview for {slide.node.name}")
        path = output_dir / f"slide_{slide.index:03d}.png"
        path.write_bytes(buffer.tobytes())
        written.append(path)
    LOGGER.info("Wrote %s preview(s) to %s", len(written), output_dir)
    return written


__all__ = ["render_slide_preview", "write_previews"]
