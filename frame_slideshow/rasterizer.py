"""Turn source frames into :class:`Slide` values through the host."""

from __future__ import annotations

import asyncio
import logging
from time import perf_counter
from typing import Any, List, Optional, Sequence

from frame_slideshow.errors import RasterizationFailure
from frame_slideshow.host import SlideshowHost
from frame_slideshow.models import Slide
from frame_slideshow.progress import eta_string

LOGGER = logging.getLogger(__name__)


class RasterizerAdapter:
    """Convert frames one at a time using the host export and message hand-off."""

    def __init__(self, host: SlideshowHost, *, logger: Optional[logging.Logger] = None) -> None:
        self.host = host
        self.logger = logger or LOGGER

    async def _round_trip(self, raw_bytes: bytes) -> bytes:
        channel = self.host.show_ui()
        loop = asyncio.get_running_loop()
        reply: asyncio.Future = loop.create_future()

        def _resolve(message: bytes) -> None:
            if not reply.done():
                reply.set_result(message)

        def _reject(exc: BaseException) -> None:
            if not reply.done():
                reply.set_exception(exc)

        channel.on_message(_resolve, _reject)
        channel.post_message(raw_bytes)
        return await reply

    async def convert_to_image(self, frame: Any) -> bytes:
        try:
            raw_bytes = await self.host.export_region_as_image_bytes(frame)
            image_bytes = await self._round_trip(raw_bytes)
        except Exception as exc:
            raise RasterizationFailure(f"Failed to rasterize frame {frame.name!r}: {exc}") from exc

        if not image_bytes:
            raise RasterizationFailure(f"Frame {frame.name!r} produced no image data")
        return bytes(image_bytes)

    async def convert(self, frame: Any) -> Slide:
        image_bytes = await self.convert_to_image(frame)
        return Slide(
            x=frame.x,
            y=frame.y,
            width=frame.width,
            height=frame.height,
            image_bytes=image_bytes,
        )

    async def convert_all(self, frames: Sequence[Any]) -> List[Slide]:
        """Convert ``frames`` sequentially, stopping at the first failure."""
        total = len(frames)
        slides: List[Slide] = []
        started = perf_counter()
        for frame in frames:
            slides.append(await self.convert(frame))
            self.logger.info(
                "Rasterized frame %s/%s '%s' (%s)",
                len(slides),
                total,
                frame.name,
                eta_string(perf_counter() - started, len(slides), total),
            )
        return slides


__all__ = ["RasterizerAdapter"]
