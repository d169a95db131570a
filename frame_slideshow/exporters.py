"""Region rasterization backends used by the in-memory canvas host."""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple
from urllib.parse import quote

import cv2
import numpy as np
import requests

from frame_slideshow.config import _parse_color
from frame_slideshow.errors import ExportError

LOGGER = logging.getLogger(__name__)


class FillExporter:
    """Rasterize a region from its fill colour and the rectangles inside it."""

    def __init__(
        self,
        *,
        scale: float = 1.0,
        background_color: Tuple[int, int, int] = (255, 255, 255),
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.scale = scale if scale > 0 else 1.0
        self.background_color = background_color
        self.logger = logger or LOGGER

    def _scaled(self, value: float) -> int:
        return int(round(value * self.scale))

    def _paint_children(self, canvas: np.ndarray, node: Any, offset_x: float, offset_y: float) -> None:
        height, width = canvas.shape[:2]
        for child in getattr(node, "children", []):
            child_x = offset_x + child.x
            child_y = offset_y + child.y
            if child.fill_color is not None:
                x0 = max(0, self._scaled(child_x))
                y0 = max(0, self._scaled(child_y))
                x1 = min(width, self._scaled(child_x + child.width))
                y1 = min(height, self._scaled(child_y + child.height))
                if x1 > x0 and y1 > y0:
                    color = tuple(int(channel) for channel in _parse_color(child.fill_color))
                    cv2.rectangle(canvas, (x0, y0), (x1 - 1, y1 - 1), color, thickness=-1)
            self._paint_children(canvas, child, child_x, child_y)

    def export(self, region: Any) -> bytes:
        width = max(1, self._scaled(region.width))
        height = max(1, self._scaled(region.height))
        canvas = np.zeros((height, width, 3), dtype=np.uint8)
        canvas[:] = _parse_color(region.fill_color, self.background_color)
        self._paint_children(canvas, region, 0.0, 0.0)

        success, buffer = cv2.imencode(".png", canvas)
        if not success:
            raise ExportError(f"Failed to encode raster for region {region.id} ({region.name})")
        self.logger.debug("Rasterized %s (%sx%s px)", region.name, width, height)
        return buffer.tobytes()


class HttpExporter:
    """Fetch pre-rendered region images from ``{base_url}/{region_id}.png``."""

    def __init__(
        self,
        base_url: str,
        *,
        http_timeout: int = 10,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.http_timeout = http_timeout
        self.session = session or requests.Session()
        self.logger = logger or LOGGER

    def url_for(self, region: Any) -> str:
        return f"{self.base_url}/{quote(str(region.id), safe='')}.png"

    def export(self, region: Any) -> bytes:
        url = self.url_for(region)
        try:
            response = self.session.get(url, timeout=self.http_timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ExportError(f"Failed to export region {region.id} from {url}: {exc}") from exc

        content = response.content
        if not content:
            raise ExportError(f"Export endpoint returned no image data for region {region.id}")
        self.logger.debug("Fetched %s bytes for %s from %s", len(content), region.name, url)
        return content


__all__ = ["FillExporter", "HttpExporter"]
