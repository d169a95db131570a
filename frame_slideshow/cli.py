"""
Command line interface for building slideshows from canvas documents.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from frame_slideshow.canvas import CanvasHost
from frame_slideshow.config import ORDERINGS, SlideshowSettings, load_config
from frame_slideshow.document import load_document, write_document
from frame_slideshow.errors import ConfigError, DocumentError, SlideshowError
from frame_slideshow.exporters import FillExporter, HttpExporter
from frame_slideshow.logging_setup import configure_logging
from frame_slideshow.ordering import resolve_comparator, select_frames
from frame_slideshow.pipeline import build_slideshow
from frame_slideshow.preview import write_previews

def _apply_overrides(settings: SlideshowSettings, args: argparse.Namespace) -> SlideshowSettings:
    overrides = {}
    if args.order:
        overrides["ordering"] = args.order
    if getattr(args, "export_base_url", None):
        overrides["export_base_url"] = args.export_base_url
    return replace(settings, **overrides) if overrides else settings


def _build_host(settings: SlideshowSettings, logger: logging.Logger) -> CanvasHost:
    if settings.export_base_url:
        exporter = HttpExporter(
            settings.export_base_url,
            http_timeout=settings.http_timeout,
            logger=logger,
        )
    else:
        exporter = FillExporter(scale=settings.export_scale, logger=logger)
    return CanvasHost(exporter, logger=logger)


def run_build(args: argparse.Namespace, logger: logging.Logger) -> int:
    try:
        settings = _apply_overrides(load_config(args.config), args)
        host = _build_host(settings, logger)
        load_document(args.document, host)
        graph = build_slideshow(host, settings, logger=logger)
    except (ConfigError, DocumentError, SlideshowError) as exc:
        logger.error("%s", exc)
        return 1

    logger.debug("Navigation graph: %s", graph.as_dict())
    output_path = write_document(host, args.output or args.document)
    logger.info("Wrote document to %s", output_path)

    if args.previews_dir:
        write_previews(host, graph, args.previews_dir)

    logger.info(
        "Slideshow complete: %s slide(s), %s transition(s), entry point: %s",
        len(graph.slides),
        graph.edge_count,
        graph.entry_points[0].name if graph.entry_points else "none",
    )
    return 0


def run_inspect(args: argparse.Namespace, logger: logging.Logger) -> int:
    try:
        ordering = args.order or load_config(args.config).ordering
        host = load_document(args.document)
    except (ConfigError, DocumentError) as exc:
        logger.error("%s", exc)
        return 1

    page = host.current_page()
    frames = select_frames(page.children, resolve_comparator(ordering))
    logger.info("%s frame(s) on '%s' in %s-priority order:", len(frames), page.name, ordering)
    for index, frame in enumerate(frames):
        logger.info(
            "%3d. %s (%s) at (%g, %g) size %gx%g",
            index,
            frame.name or "<unnamed>",
            frame.id,
            frame.x,
            frame.y,
            frame.width,
            frame.height,
        )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Turn the frames of a canvas document into a linked slideshow.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write log output to this file.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("slideshow.json"),
        help="Settings file (default: slideshow.json; environment variables are used when missing).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    build_cmd = subparsers.add_parser("build", help="Build the slideshow page.")
    build_cmd.add_argument("document", type=Path, help="Canvas document JSON file.")
    build_cmd.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Where to write the updated document (default: overwrite the input).",
    )
    build_cmd.add_argument(
        "--order",
        choices=ORDERINGS,
        help="Frame ordering: 'y' (rows first) or 'x' (columns first).",
    )
    build_cmd.add_argument(
        "--previews-dir",
        type=Path,
        help="Write a PNG preview of every composed slide into this directory.",
    )
    build_cmd.add_argument(
        "--export-base-url",
        help="Fetch frame rasters from <url>/<frame id>.png instead of rendering fills.",
    )

    inspect_parser = subparsers.add_parser("inspect", help="List frames in slideshow order.")
    inspect_parser.add_argument("document", type=Path, help="Canvas document JSON file.")
    inspect_parser.add_argument(
        "--order",
        choices=ORDERINGS,
        help="Frame ordering: 'y' (rows first) or 'x' (columns first).",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = configure_logging(verbose=args.verbose, log_file=args.log_file)

    if args.command == "build":
        return run_build(args, logger)
    if args.command == "inspect":
        return run_inspect(args, logger)

    parser.error(f"Unhandled command: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
