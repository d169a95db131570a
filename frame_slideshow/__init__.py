"""
Build click-through slideshows from the frames of a canvas document.
"""

from .canvas import CanvasHost, Node
from .config import SlideshowSettings, TransitionSettings, load_config
from .errors import (
    ConfigError,
    DocumentError,
    ExportError,
    LinkResolutionFailure,
    RasterizationFailure,
    SlideshowError,
)
from .host import MessageChannel, SlideshowHost
from .models import ComposedSlide, NavigationGraph, PreviewRole, Slide
from .pipeline import SlideshowBuilder, build_slideshow

__all__ = [
    "CanvasHost",
    "ComposedSlide",
    "ConfigError",
    "DocumentError",
    "ExportError",
    "LinkResolutionFailure",
    "MessageChannel",
    "NavigationGraph",
    "Node",
    "PreviewRole",
    "RasterizationFailure",
    "Slide",
    "SlideshowBuilder",
    "SlideshowError",
    "SlideshowHost",
    "SlideshowSettings",
    "TransitionSettings",
    "build_slideshow",
    "load_config",
]
