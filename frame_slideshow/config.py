"""Configuration dataclasses and loading helpers for the slideshow builder."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from frame_slideshow.errors import ConfigError
from frame_slideshow.models import Easing, TransitionSpec

ORDERINGS = ("y", "x")


def _parse_bool(value: Any, default: bool) -> bool:
    """Parse truthy/falsy values from multiple input types."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    if isinstance(value, (int, float)):
        return value != 0
    return default


def _parse_positive_int(value: Any, default: int) -> int:
    """Parse a positive integer with fallback to default."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def _parse_float(value: Any, default: float) -> float:
    """Parse a floating point number with fallback to default."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _parse_positive_float(value: Any, default: float) -> float:
    parsed = _parse_float(value, default)
    return parsed if parsed > 0 else default


def _parse_ordering(value: Any, default: str = "y") -> str:
    if isinstance(value, str) and value.strip().lower() in ORDERINGS:
        return value.strip().lower()
    return default


def _parse_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_color(value: Any, default: Tuple[int, int, int] = (255, 255, 255)) -> Tuple[int, int, int]:
    """Parse and clamp colour definitions to BGR tuples."""

    def _clamp_triplet(triplet: Any) -> Optional[Tuple[int, int, int]]:
        if not isinstance(triplet, (list, tuple)) or len(triplet) != 3:
            return None
        try:
            return tuple(
                max(0, min(255, int(channel)))
                for channel in triplet
            )
        except (TypeError, ValueError):
            return None

    def _to_bgr(channels: Tuple[int, int, int], order: Optional[str]) -> Optional[Tuple[int, int, int]]:
        color_order = (order or "rgb").lower()
        if color_order == "bgr":
            return channels
        if color_order == "rgb":
            return (channels[2], channels[1], channels[0])
        return None

    if isinstance(value, Mapping):
        if "hex" in value and isinstance(value["hex"], str):
            return _parse_color(value["hex"], default)
        if "value" in value:
            channels = _clamp_triplet(value["value"])
            if channels is None:
                return default
            bgr = _to_bgr(channels, value.get("order") or value.get("color_space"))
            return bgr if bgr is not None else default

    if isinstance(value, (list, tuple)):
        channels = _clamp_triplet(value)
        if channels is None:
            return default
        return _to_bgr(channels, "rgb") or default

    if isinstance(value, str):
        hex_value = value.lstrip("#")
        if len(hex_value) == 6:
            try:
                r = int(hex_value[0:2], 16)
                g = int(hex_value[2:4], 16)
                b = int(hex_value[4:6], 16)
                return (b, g, r)
            except ValueError:
                return default

    return default


@dataclass(frozen=True)
class TransitionSettings:
    """Animation attached to every forward navigation edge."""

    transition_type: str = "SMART_ANIMATE"
    easing: str = "EASE_OUT"
    duration: float = 1.0
    navigation: str = "NAVIGATE"
    preserve_scroll_position: bool = False

    def to_spec(self) -> TransitionSpec:
        return TransitionSpec(
            type=self.transition_type,
            easing=Easing(type=self.easing),
            duration=self.duration,
        )


@dataclass(frozen=True)
class SlideshowSettings:
    """Top-level configuration for a slideshow run."""

    ordering: str = "y"
    squeeze_divisor: float = 12
    preview_gap: float = 20
    entry_label: str = "Start Slideshow"
    page_name: str = "Slideshow"
    export_scale: float = 1.0
    export_base_url: Optional[str] = None
    http_timeout: int = 10
    transition: TransitionSettings = field(default_factory=TransitionSettings)


def _parse_transition_settings(raw: Any) -> TransitionSettings:
    default = TransitionSettings()
    if not isinstance(raw, Mapping):
        return default

    preserve = raw.get("preserve_scroll_position")
    return TransitionSettings(
        transition_type=str(raw.get("type", default.transition_type)),
        easing=str(raw.get("easing", default.easing)),
        duration=_parse_positive_float(raw.get("duration"), default.duration),
        navigation=str(raw.get("navigation", default.navigation)),
        preserve_scroll_position=(
            _parse_bool(preserve, default.preserve_scroll_position)
            if preserve is not None
            else default.preserve_scroll_position
        ),
    )


def _parse_settings(data: Mapping[str, Any]) -> SlideshowSettings:
    default = SlideshowSettings()
    return SlideshowSettings(
        ordering=_parse_ordering(data.get("ordering"), default.ordering),
        squeeze_divisor=_parse_positive_float(data.get("squeeze_divisor"), default.squeeze_divisor),
        preview_gap=_parse_float(data.get("preview_gap"), default.preview_gap),
        entry_label=str(data.get("entry_label") or default.entry_label),
        page_name=str(data.get("page_name") or default.page_name),
        export_scale=_parse_positive_float(data.get("export_scale"), default.export_scale),
        export_base_url=_parse_optional_str(data.get("export_base_url")),
        http_timeout=_parse_positive_int(data.get("http_timeout"), default.http_timeout),
        transition=_parse_transition_settings(data.get("transition", {})),
    )


def _load_env_settings(env: Mapping[str, str]) -> SlideshowSettings:
    """Fallback configuration derived from environment variables."""
    return _parse_settings({
        "ordering": env.get("SLIDESHOW_ORDER"),
        "squeeze_divisor": env.get("SLIDESHOW_SQUEEZE_DIVISOR"),
        "preview_gap": env.get("SLIDESHOW_PREVIEW_GAP"),
        "entry_label": env.get("SLIDESHOW_ENTRY_LABEL"),
        "page_name": env.get("SLIDESHOW_PAGE_NAME"),
        "export_scale": env.get("SLIDESHOW_EXPORT_SCALE"),
        "export_base_url": env.get("SLIDESHOW_EXPORT_BASE_URL"),
        "http_timeout": env.get("SLIDESHOW_HTTP_TIMEOUT"),
        "transition": {
            "duration": env.get("SLIDESHOW_TRANSITION_DURATION"),
            "easing": env.get("SLIDESHOW_EASING") or TransitionSettings.easing,
        },
    })


def load_config(config_path: Path | str | None, env: Mapping[str, str] | None = None) -> SlideshowSettings:
    """Load settings from a JSON file, or from the environment when it is missing."""
    source_env = os.environ if env is None else env
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            try:
                with path.open("r", encoding="utf-8") as handle:
                    data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"{path} is not valid JSON: {exc}") from exc
            return _parse_settings(data if isinstance(data, Mapping) else {})

    return _load_env_settings(source_env)


__all__ = [
    "SlideshowSettings",
    "TransitionSettings",
    "load_config",
    "_parse_bool",
    "_parse_color",
    "_parse_positive_int",
]
