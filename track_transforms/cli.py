from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import IO, Any, Optional

import yaml
from pydantic import ValidationError

from .config import Settings, find_config
from .criteria import FilterCriteria
from .filtering import filter_and_transform_tracks
from .grouping import group_titles_by_year
from .models import TransformError
from .parsing import parse_track, read_year

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


class WarningBufferHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # pragma: no cover
            msg = record.getMessage()
        self.records.append(msg)


def configure_logging(level_name: str, stream: Optional[IO[str]] = None) -> WarningBufferHandler:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    stream = stream or sys.stderr
    handler = logging.StreamHandler(stream)
    if getattr(stream, "isatty", lambda: False)():
        handler.setFormatter(ColorFormatter(LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(warn_buffer)
    return warn_buffer


def load_tracks(stream: IO[str]) -> list[Any]:
    try:
        payload = json.load(stream)
    except json.JSONDecodeError as exc:
        raise TransformError(f"Input is not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise TransformError(f"Expected a JSON array of tracks, got {type(payload).__name__}")
    return payload


def _read_input(path: Optional[Path]) -> list[Any]:
    if path is None:
        return load_tracks(sys.stdin)
    try:
        with path.open("r", encoding="utf-8") as fh:
            return load_tracks(fh)
    except OSError as exc:
        raise TransformError(f"Cannot read {path}: {exc}") from exc


def _load_settings(explicit: Optional[Path]) -> Settings:
    config_path = find_config(explicit)
    if config_path is None:
        return Settings()
    try:
        return Settings.load(config_path)
    except OSError as exc:
        raise TransformError(f"Cannot read {config_path}: {exc}") from exc
    except (ValidationError, yaml.YAMLError) as exc:
        raise TransformError(f"Invalid config {config_path}: {exc}") from exc


def _run_group(tracks: list[Any], settings: Settings) -> Any:
    dropped = sum(1 for raw in tracks if read_year(raw) is None)
    if dropped:
        logger.warning("%d of %d track(s) had no finite year and were skipped", dropped, len(tracks))
    grouped = group_titles_by_year(tracks, use_locale=settings.collation.use_locale)
    return {str(year): titles for year, titles in grouped.items()}


def _run_filter(tracks: list[Any], settings: Settings, args: argparse.Namespace) -> Any:
    overrides = {
        key: value
        for key, value in (
            ("min_year", args.min_year),
            ("max_year", args.max_year),
            ("artist", args.artist),
        )
        if value is not None
    }
    criteria = FilterCriteria.model_validate({**settings.filter.model_dump(), **overrides})
    dropped = sum(1 for raw in tracks if parse_track(raw) is None)
    if dropped:
        logger.warning("%d of %d track(s) were malformed and skipped", dropped, len(tracks))
    return filter_and_transform_tracks(tracks, criteria)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Group and filter music-track records (JSON in, JSON out)")
    parser.add_argument("--config", type=Path, help="Path to track-transforms.yaml")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    parser.add_argument("--input", type=Path, help="Read tracks from this JSON file instead of stdin")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("group", help="Group titles by release year")
    filter_parser = subparsers.add_parser(
        "filter", help="Filter tracks by year range/artist and add a decade label"
    )
    filter_parser.add_argument("--min-year", type=float, default=None, help="Drop tracks released before this year")
    filter_parser.add_argument("--max-year", type=float, default=None, help="Drop tracks released after this year")
    filter_parser.add_argument("--artist", default=None, help="Keep only this artist (case-insensitive)")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    warn_buffer = configure_logging(args.log_level)

    try:
        settings = _load_settings(args.config)
        tracks = _read_input(args.input)
        match args.command:
            case "group":
                result = _run_group(tracks, settings)
            case "filter":
                result = _run_filter(tracks, settings, args)
            case _:
                parser.error("Unknown command")
    except TransformError as exc:
        logger.error("%s", exc)
        raise SystemExit(2) from exc

    json.dump(result, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    if warn_buffer.records:
        print("Warnings summary:", file=sys.stderr)
        for line in warn_buffer.records:
            print(f" - {line}", file=sys.stderr)


if __name__ == "__main__":
    main()
