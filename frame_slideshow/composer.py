"""Slide composition: one container per slide holding adjacent-slide previews."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from frame_slideshow.host import SlideshowHost
from frame_slideshow.models import ComposedSlide, ImageFill, PreviewElement, PreviewRole, Slide

LOGGER = logging.getLogger(__name__)

DEFAULT_SQUEEZE_DIVISOR = 12
DEFAULT_PREVIEW_GAP = 20

# (x, width) -> (x, width)
HorizontalTransform = Callable[[float, float], Tuple[float, float]]


def _unchanged(x: float, width: float) -> Tuple[float, float]:
    return x, width


def squeeze_left(divisor: float, gap: float) -> HorizontalTransform:
    """Shrink to ``width / divisor`` and park the element just off the left edge."""

    def _transform(x: float, width: float) -> Tuple[float, float]:
        squeezed = width / divisor
        return -(squeezed + gap), squeezed

    return _transform


@dataclass(frozen=True)
class PreviewRule:
    """How the slide at a given offset is drawn inside the current container.

    Rules are applied in table order and each element is appended as it is
    built, so table order is also paint order (later rules paint on top).
    """

    role: PreviewRole
    transform: HorizontalTransform

    @property
    def offset(self) -> int:
        return self.role.offset


def default_rules(
    squeeze_divisor: float = DEFAULT_SQUEEZE_DIVISOR,
    preview_gap: float = DEFAULT_PREVIEW_GAP,
) -> Tuple[PreviewRule, ...]:
    # Paint order is next, current, previous: the current image covers the
    # full-size next preview, and the squeezed previous preview sits off-canvas.
    return (
        PreviewRule(PreviewRole.NEXT, _unchanged),
        PreviewRule(PreviewRole.CURRENT, _unchanged),
        PreviewRule(PreviewRole.PREVIOUS, squeeze_left(squeeze_divisor, preview_gap)),
    )


class SlideComposer:
    """Build composed slide containers on a destination page."""

    def __init__(
        self,
        host: SlideshowHost,
        *,
        rules: Optional[Sequence[PreviewRule]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.host = host
        self.rules = tuple(rules) if rules is not None else default_rules()
        self.logger = logger or LOGGER

    def _new_container(self, name: str, slide: Slide) -> Any:
        container = self.host.create_container()
        container.name = name
        container.clips_content = True
        container.set_position(slide.x, slide.y)
        container.resize(slide.width, slide.height)
        return container

    def _new_image(self, name: str, x: float, y: float, width: float, height: float, image_bytes: bytes) -> Any:
        image = self.host.create_rectangle()
        image.name = name
        image.set_position(x, y)
        image.resize(width, height)
        image.set_fill(ImageFill(image_hash=self.host.register_image_asset(image_bytes)))
        return image

    def compose_slide(self, index: int, slides: Sequence[Slide]) -> ComposedSlide:
        slide = slides[index]
        container = self._new_container(f"frame {index}", slide)
        composed = ComposedSlide(index=index, node=container)

        for rule in self.rules:
            source_index = index + rule.offset
            if source_index < 0 or source_index >= len(slides):
                continue

            source = slides[source_index]
            x, width = rule.transform(0, source.width)
            image = self._new_image(
                f"rect {source_index}",
                x,
                0,
                width,
                source.height,
                source.image_bytes,
            )
            container.append_child(image)
            composed.elements.append(PreviewElement(role=rule.role, source_index=source_index, node=image))

        return composed

    def compose(self, slides: Sequence[Slide], page: Any) -> List[ComposedSlide]:
        """Create one container per slide on ``page``, in input order."""
        composed: List[ComposedSlide] = []
        for index in range(len(slides)):
            result = self.compose_slide(index, slides)
            page.append_child(result.node)
            composed.append(result)
            self.logger.debug(
                "Composed %s with %s element(s)",
                result.node.name,
                len(result.elements),
            )
        return composed


__all__ = [
    "DEFAULT_PREVIEW_GAP",
    "DEFAULT_SQUEEZE_DIVISOR",
    "PreviewRule",
    "SlideComposer",
    "default_rules",
    "squeeze_left",
]
