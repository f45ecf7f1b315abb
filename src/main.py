#!/usr/bin/env python3
"""
PDF Page Numbering Tool
Command line front end for stamping, previewing and serving page numbering.

Commands:
- stamp: add page numbers to a PDF and write <name>_numbered.pdf
- preview: render one page with its number overlay to a PNG
- serve: run the HTTP API
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

import config
from error_handling import ProcessingError, ValidationError
from logger_manager import LoggerManager
from numbering_policy import build_page_plan
from numbering_settings import FontSettings, NumberingSettings, PositionPreset, PositionSettings
from pdf_document import SourceDocument
from preview_renderer import PreviewRenderer
from stamping_engine import PageNumberStamper
from unit_converter import Unit


def _add_settings_arguments(parser):
    numbering = parser.add_argument_group("numbering")
    numbering.add_argument("--visible-from", type=int, default=config.DEFAULT_VISIBLE_FROM_PAGE,
                           help="First page that shows a number")
    numbering.add_argument("--start-number", type=int, default=config.DEFAULT_START_NUMBER,
                           help="Number shown on the first visible page")
    numbering.add_argument("--range", nargs=2, type=int, metavar=("FROM", "TO"),
                           help="Only number pages inside this inclusive range")
    numbering.add_argument("--skip", default="", help='Pages to leave unnumbered, e.g. "1,2,10-12"')

    position = parser.add_argument_group("position")
    position.add_argument("--preset", default=config.DEFAULT_POSITION_PRESET,
                          choices=[preset.value for preset in PositionPreset])
    position.add_argument("--x", type=float, default=config.DEFAULT_CUSTOM_X,
                          help="Custom x (with --preset custom)")
    position.add_argument("--y", type=float, default=config.DEFAULT_CUSTOM_Y,
                          help="Custom y (with --preset custom)")
    position.add_argument("--units", default=config.DEFAULT_UNITS, choices=[unit.value for unit in Unit])
    position.add_argument("--gutter", type=float, default=config.DEFAULT_GUTTER_MARGIN,
                          help="Gutter margin in --units")
    position.add_argument("--gutter-preset", choices=sorted(config.GUTTER_PRESETS_INCHES),
                          help="Gutter preset in inches (overrides --gutter)")
    position.add_argument("--mirrored", action="store_true", help="Mirror the gutter on odd/even pages")

    font = parser.add_argument_group("font")
    font.add_argument("--font", default=config.DEFAULT_FONT_FAMILY, help="helvetica, times or courier")
    font.add_argument("--size", type=float, default=config.DEFAULT_FONT_SIZE)
    font.add_argument("--color", default=config.DEFAULT_FONT_COLOR)
    font.add_argument("--opacity", type=float, default=config.DEFAULT_FONT_OPACITY)


def settings_from_args(args, page_count):
    """Build the three settings records from parsed arguments"""
    numbering = NumberingSettings(
        visible_from_page=args.visible_from,
        start_number=args.start_number,
        skip_pattern=args.skip,
    ).for_document(page_count)
    if args.range:
        numbering = replace(numbering, custom_range=True, range_from=args.range[0], range_to=args.range[1])

    position = PositionSettings(
        preset=args.preset,
        custom_x=args.x,
        custom_y=args.y,
        units=args.units,
        gutter_margin=args.gutter,
        mirrored_gutter=args.mirrored,
    )
    if args.gutter_preset:
        position = position.with_gutter_preset(args.gutter_preset)

    font = FontSettings(family=args.font, size=args.size, color=args.color, opacity=args.opacity)
    return numbering, position, font


def build_parser():
    parser = argparse.ArgumentParser(prog="pdf-numbering", description="Add page numbers to PDF documents")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show per-page details")
    subparsers = parser.add_subparsers(dest="command", required=True)

    stamp = subparsers.add_parser("stamp", help="Add page numbers and write a new PDF")
    stamp.add_argument("input", type=Path)
    stamp.add_argument("-o", "--output", type=Path, help="Defaults to <input>_numbered.pdf")
    stamp.add_argument("--dry-run", action="store_true", help="Only print which pages get which number")
    stamp.add_argument("--log-dir", type=Path, help="Write a session log file here")
    _add_settings_arguments(stamp)

    preview = subparsers.add_parser("preview", help="Render one page with its number to PNG")
    preview.add_argument("input", type=Path)
    preview.add_argument("--page", type=int, default=1)
    preview.add_argument("--zoom", type=int, default=config.DEFAULT_ZOOM)
    preview.add_argument("-o", "--output", type=Path, required=True)
    _add_settings_arguments(preview)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser


def run_stamp(args):
    document = SourceDocument.from_path(args.input)
    numbering, position, font = settings_from_args(args, document.page_count)

    if args.dry_run:
        for entry in build_page_plan(numbering, document.page_count):
            label = str(entry.display_number) if entry.numbered else f"- ({entry.reason})"
            print(f"page {entry.page_index:>4}: {label}")
        return 0

    logger_manager = LoggerManager(
        log_directory=args.log_dir,
        log_callback=print if args.verbose else None,
    )
    stamper = PageNumberStamper(logger_manager=logger_manager, log_callback=print)

    def on_progress(page, total):
        print(f"\rNumbering page {page}/{total}", end="", flush=True)
        if page == total:
            print()

    result = stamper.stamp_document(document, numbering, position, font, on_progress)

    output = args.output or args.input.with_name(document.output_name)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result)
    print(f"Saved {output}")

    if args.log_dir:
        logger_manager.save_log_file(args.log_dir)
    return 0


def run_preview(args):
    document = SourceDocument.from_path(args.input)
    numbering, position, font = settings_from_args(args, document.page_count)

    frame = PreviewRenderer().render(document, args.page, numbering, position, font, args.zoom)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    frame.image.save(args.output, format="PNG")

    status = f"number {frame.display_number}" if frame.show_number else "number hidden"
    print(f"Page {frame.page_index} at {frame.zoom}% ({status}) -> {args.output}")
    return 0


def run_serve(args):
    import uvicorn

    from server import app

    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def main(argv=None):
    """Main application entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    commands = {
        "stamp": run_stamp,
        "preview": run_preview,
        "serve": run_serve,
    }

    try:
        return commands[args.command](args)
    except (ValidationError, ProcessingError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
