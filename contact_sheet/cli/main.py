"""Command line interface for contact-sheet."""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from contact_sheet.config.config import DEFAULT_CONFIG_PATH, OUTPUT_FORMATS, TIMESTAMP_POSITIONS
from contact_sheet.config.sheet_config import SheetConfig, create_default_config_file, load_config
from contact_sheet.exceptions import ConfigError, ContactSheetError
from contact_sheet.logging.logger import get_logger, setup_logging
from contact_sheet.models import VideoMetadata
from contact_sheet.utils.time_utils import format_time, parse_time_value


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="contact-sheet",
        description="Turn a video into a grid of timestamped thumbnails",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show video information
  python -m contact_sheet info input/video.mp4

  # Print the sampling and geometry plan as JSON
  python -m contact_sheet plan input/video.mp4 --interval 30 --columns 5

  # Plan from stored metadata, no video needed
  python -m contact_sheet plan --metadata metadata.json --limit 12

  # Generate a sheet from the first minute, one thumbnail every 2 seconds
  python -m contact_sheet generate input/video.mp4 -o sheet.jpg --end 00:01:00.000 --interval-seconds 2

  # Create default configuration file
  python -m contact_sheet create-config -o config/default.json
        """
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set logging level (default: from config, INFO)"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        help="Also write a log file into this directory"
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to configuration file (JSON format)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    info_parser = subparsers.add_parser(
        "info",
        help="Show information about a video file",
        description="Display probed metadata of a video file."
    )
    info_parser.add_argument("video_path", type=str, help="Path to the video file")

    plan_parser = subparsers.add_parser(
        "plan",
        help="Print the contact sheet plan as JSON",
        description="Compute samples, grid and draw plan without decoding any frames."
    )
    plan_parser.add_argument("video_path", type=str, nargs="?", help="Path to the video file")
    plan_parser.add_argument(
        "--metadata", "-m",
        type=str,
        help="JSON file with video metadata (instead of probing a video)"
    )
    plan_parser.add_argument("--output", "-o", type=str, help="Write the plan to this file")
    _add_sheet_arguments(plan_parser)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a contact sheet image",
        description="Sample frames, lay them out and encode the sheet."
    )
    generate_parser.add_argument("video_path", type=str, help="Path to the video file")
    generate_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output image path (default: <video name>_contact_sheet.<ext>)"
    )
    _add_sheet_arguments(generate_parser)
    generate_parser.add_argument("--format", choices=OUTPUT_FORMATS, help="Image format")
    generate_parser.add_argument("--quality", type=int, help="JPEG quality 1-100")

    config_parser = subparsers.add_parser(
        "create-config",
        help="Create a default configuration file",
        description="Generate a default configuration file that can be customized."
    )
    config_parser.add_argument(
        "--output", "-o",
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help=f"Output path for configuration file (default: {DEFAULT_CONFIG_PATH})"
    )

    return parser


def _add_sheet_arguments(parser: argparse.ArgumentParser) -> None:
    selection = parser.add_argument_group("frame selection")
    selection.add_argument("--start", type=str, help="Start time (e.g.: 1.5s, 200ms, 00:00:03.500)")
    selection.add_argument("--end", type=str, help="End time (default: video duration)")
    selection.add_argument("--start-frame", type=int, help="Start frame (inclusive)")
    selection.add_argument("--end-frame", type=int, help="End frame (inclusive)")
    selection.add_argument("--interval", type=float, help="Take every Nth frame")
    selection.add_argument("--interval-seconds", type=str, help="Interval as time (e.g.: 2s)")
    selection.add_argument("--limit", type=int, help="Maximum number of thumbnails")

    layout = parser.add_argument_group("layout")
    layout.add_argument("--columns", type=int, help="Grid columns")
    layout.add_argument("--rows", type=int, help="Fixed grid rows (default: derived)")
    layout.add_argument("--thumb-width", type=int, help="Thumbnail width in px")
    layout.add_argument("--thumb-height", type=int, help="Thumbnail height in px (default: from aspect ratio)")
    layout.add_argument("--border-spacing", type=int, help="Outer canvas margin in px")
    layout.add_argument("--film-spacing", type=int, help="Gap between thumbnails in px")
    layout.add_argument("--no-border", action="store_true", help="Do not draw thumbnail borders")
    layout.add_argument("--no-timestamp", action="store_true", help="Do not draw timestamp labels")
    layout.add_argument("--timestamp-position", choices=TIMESTAMP_POSITIONS, help="Timestamp label position")
    layout.add_argument("--background", type=str, help="Canvas background color")


def apply_overrides(config: SheetConfig, args: argparse.Namespace) -> SheetConfig:
    """Overlay command line flags onto a loaded configuration."""
    selection = config.selection
    if args.start is not None:
        selection.start_time = parse_time_value(args.start, allow_zero=True)
        selection.start_frame = None
    if args.end is not None:
        selection.end_time = parse_time_value(args.end, allow_zero=True)
        selection.end_frame = None
    if args.start_frame is not None:
        selection.start_frame = args.start_frame
    if args.end_frame is not None:
        selection.end_frame = args.end_frame
    if args.interval is not None:
        selection.interval_value = args.interval
        selection.interval_seconds = None
    if args.interval_seconds is not None:
        selection.interval_seconds = parse_time_value(args.interval_seconds)
    if args.limit is not None:
        selection.frame_limit = args.limit

    layout_changes = {
        "columns": args.columns,
        "rows": args.rows,
        "thumbnail_width": args.thumb_width,
        "thumbnail_height": args.thumb_height,
        "border_spacing": args.border_spacing,
        "film_spacing": args.film_spacing,
        "timestamp_position": args.timestamp_position,
        "background_color": args.background,
    }
    layout_changes = {k: v for k, v in layout_changes.items() if v is not None}
    if args.no_border:
        layout_changes["show_border"] = False
    if args.no_timestamp:
        layout_changes["show_timestamp"] = False
    config.layout = replace(config.layout, **layout_changes)

    output_changes = {
        "format": getattr(args, "format", None),
        "quality": getattr(args, "quality", None),
    }
    output_changes = {k: v for k, v in output_changes.items() if v is not None}
    config.output = replace(config.output, **output_changes)

    return config.validated()


def handle_info_command(args: argparse.Namespace) -> int:
    from contact_sheet.backends.video_processing import OpenCVDecoder

    metadata = OpenCVDecoder().probe(args.video_path)
    print(f"📹 {Path(args.video_path).name}")
    print(f"   Duration:   {format_time(metadata.duration)} ({metadata.duration:.3f}s)")
    print(f"   Frame rate: {metadata.fps:.3f} fps")
    print(f"   Resolution: {metadata.width}x{metadata.height}")
    print(f"   Codec:      {metadata.codec}")
    print(f"   Last frame: {metadata.max_frame_index}")
    return 0


def handle_plan_command(args: argparse.Namespace, config: SheetConfig) -> int:
    from contact_sheet.core.planner import plan_contact_sheet

    if args.metadata:
        try:
            with open(args.metadata, "r", encoding="utf-8") as f:
                metadata = VideoMetadata.from_dict(json.load(f))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Failed to read metadata file '{args.metadata}': {exc}") from exc
    elif args.video_path:
        from contact_sheet.backends.video_processing import OpenCVDecoder

        metadata = OpenCVDecoder().probe(args.video_path)
    else:
        get_logger().error("❌ Provide a video path or --metadata")
        return 2

    selection = config.selection.resolve(metadata)
    plan = plan_contact_sheet(metadata, selection, config.layout)
    payload = plan.to_json()
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload, encoding="utf-8")
        get_logger().info(f"💾 Plan saved to {output_path}")
    else:
        print(payload)
    return 0


def handle_generate_command(args: argparse.Namespace, config: SheetConfig) -> int:
    from contact_sheet.pipeline import generate_contact_sheet

    video_path = Path(args.video_path)
    output_path = Path(args.output) if args.output else video_path.with_name(
        f"{video_path.stem}_contact_sheet{config.output.extension}"
    )

    result = generate_contact_sheet(
        video_path,
        selection=config.selection,
        layout=config.layout,
        output=config.output,
        output_path=output_path,
    )
    print(f"Done. Saved {result.plan.total_samples} thumbnails to '{result.output_path}'.")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI function."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "create-config":
        path = create_default_config_file(args.output)
        print(f"Default configuration saved to: {path}")
        return 0

    try:
        config = load_config(args.config)
        setup_logging(args.log_level or config.log_level, args.log_dir or config.log_dir)

        if args.command == "info":
            return handle_info_command(args)

        config = apply_overrides(config, args)
        if args.command == "plan":
            return handle_plan_command(args, config)
        if args.command == "generate":
            return handle_generate_command(args, config)
    except ContactSheetError as exc:
        get_logger().log_operation_error(args.command, exc)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
