"""Exception hierarchy for the slideshow builder."""

from __future__ import annotations


class SlideshowError(RuntimeError):
    """Base class for failures that abort a slideshow run."""


class RasterizationFailure(SlideshowError):
    """Raised when a frame could not be turned into image bytes."""


class ExportError(SlideshowError):
    """Raised by an exporter when the underlying render service fails."""


class LinkResolutionFailure(SlideshowError):
    """Raised when a navigation edge points at a node outside the active page."""


class DocumentError(ValueError):
    """Raised when a canvas document cannot be parsed."""


class ConfigError(ValueError):
    """Raised when a settings file cannot be parsed."""


__all__ = [
    "ConfigError",
    "DocumentError",
    "ExportError",
    "LinkResolutionFailure",
    "RasterizationFailure",
    "SlideshowError",
]
