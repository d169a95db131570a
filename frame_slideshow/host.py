"""Host capability boundary used by the slideshow pipeline.

The pipeline never creates canvas primitives or rasterizes regions itself. It
asks a :class:`SlideshowHost` to do so, which keeps the ordering, layout and
linking logic independent of the platform that owns the document.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Sequence

from frame_slideshow.models import EntryPoint, Reaction

LOGGER = logging.getLogger(__name__)

MessageHandler = Callable[[bytes], bytes]
MessageCallback = Callable[[bytes], None]
ErrorCallback = Callable[[BaseException], None]


class MessageChannel:
    """Asynchronous message channel between the pipeline and a helper peer.

    ``post_message`` hands a payload to the peer on the next iteration of the
    running event loop; the peer's reply is delivered to the callback
    registered with :meth:`on_message`. Registering a new callback replaces
    the previous one.
    """

    def __init__(self, peer: MessageHandler, *, logger: Optional[logging.Logger] = None) -> None:
        self.peer = peer
        self.logger = logger or LOGGER
        self._on_message: Optional[MessageCallback] = None
        self._on_error: Optional[ErrorCallback] = None
        self.posted = 0

    def on_message(self, callback: MessageCallback, on_error: Optional[ErrorCallback] = None) -> None:
        self._on_message = callback
        self._on_error = on_error

    def post_message(self, payload: bytes) -> None:
        loop = asyncio.get_running_loop()
        self.posted += 1
        loop.call_soon(self._deliver, payload)

    def _deliver(self, payload: bytes) -> None:
        try:
            reply = self.peer(payload)
        except Exception as exc:
            self.logger.debug("Message peer failed: %s", exc)
            if self._on_error is not None:
                self._on_error(exc)
                return
            raise

        if self._on_message is None:
            self.logger.warning("Dropping reply of %s bytes; no listener registered", len(reply))
            return
        self._on_message(reply)


class SlideshowHost(ABC):
    """Capabilities the pipeline expects from the document host."""

    @abstractmethod
    def current_page(self) -> Any:
        """Return the page whose direct children are the input regions."""

    @abstractmethod
    async def export_region_as_image_bytes(self, region: Any) -> bytes:
        """Rasterize ``region``; may raise."""

    @abstractmethod
    def register_image_asset(self, data: bytes) -> str:
        """Register image bytes and return the asset handle used in fills."""

    @abstractmethod
    def create_container(self) -> Any:
        ...

    @abstractmethod
    def create_rectangle(self) -> Any:
        ...

    @abstractmethod
    def create_page(self) -> Any:
        ...

    @abstractmethod
    def set_active_container(self, page: Any) -> None:
        """Make ``page`` the context in which navigation targets resolve."""

    @abstractmethod
    def set_entry_points(self, container: Any, entry_points: Sequence[EntryPoint]) -> None:
        ...

    @abstractmethod
    def set_transitions(self, node: Any, reactions: Sequence[Reaction]) -> None:
        ...

    @abstractmethod
    def show_ui(self) -> MessageChannel:
        """Return the message channel used for the raster hand-off."""

    @abstractmethod
    def close(self, message: Optional[str] = None) -> None:
        """Signal the host that the run has finished."""


__all__ = ["MessageChannel", "SlideshowHost"]
