"""End-to-end slideshow assembly: select, rasterize, compose, link."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from frame_slideshow.composer import SlideComposer, default_rules
from frame_slideshow.config import SlideshowSettings
from frame_slideshow.host import SlideshowHost
from frame_slideshow.linker import NavigationLinker
from frame_slideshow.models import NavigationGraph
from frame_slideshow.ordering import resolve_comparator, select_frames
from frame_slideshow.rasterizer import RasterizerAdapter

LOGGER = logging.getLogger(__name__)


class SlideshowBuilder:
    """Run the slideshow pipeline once against a host."""

    def __init__(
        self,
        host: SlideshowHost,
        settings: Optional[SlideshowSettings] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.host = host
        self.settings = settings or SlideshowSettings()
        self.logger = logger or LOGGER
        self.rasterizer = RasterizerAdapter(host, logger=self.logger)
        self.composer = SlideComposer(
            host,
            rules=default_rules(self.settings.squeeze_divisor, self.settings.preview_gap),
            logger=self.logger,
        )
        self.linker = NavigationLinker(
            host,
            entry_label=self.settings.entry_label,
            transition=self.settings.transition,
            logger=self.logger,
        )

    async def build(self) -> NavigationGraph:
        source_page = self.host.current_page()
        frames = select_frames(source_page.children, resolve_comparator(self.settings.ordering))
        if not frames:
            self.logger.warning("No frames found on page '%s'; nothing to build", source_page.name)
            return NavigationGraph()

        self.logger.info(
            "Building slideshow from %s frame(s) on '%s' (ordering=%s)",
            len(frames),
            source_page.name,
            self.settings.ordering,
        )
        # Nothing is created on the host until every frame has rasterized.
        slides = await self.rasterizer.convert_all(frames)

        page = self.host.create_page()
        page.name = self.settings.page_name
        self.host.set_active_container(page)

        composed = self.composer.compose(slides, page)
        return self.linker.link(composed, page)

    async def run(self) -> NavigationGraph:
        """Build the slideshow and signal the host that the run is over."""
        try:
            graph = await self.build()
        except Exception as exc:
            self.logger.error("Slideshow build failed: %s", exc)
            self.host.close(f"Slideshow build failed: {exc}")
            raise

        self.host.close()
        return graph


def build_slideshow(
    host: SlideshowHost,
    settings: Optional[SlideshowSettings] = None,
    *,
    logger: Optional[logging.Logger] = None,
) -> NavigationGraph:
    """Synchronous entry point around :meth:`SlideshowBuilder.run`."""
    return asyncio.run(SlideshowBuilder(host, settings, logger=logger).run())


__all__ = ["SlideshowBuilder", "build_slideshow"]
