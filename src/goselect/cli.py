"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import logging as py_logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .catalog import Catalog, build_catalog
from .config import MAX_DEPTH_LIMIT, PAGE_SIZE_LIMIT, AppConfig, load_config
from .controller import Outcome
from .errors import EmptyCatalogError, ExitCode, GoSelectError, user_facing_error
from .logging import DEFAULT_LEVEL, configure_logging, console_level, default_log_path
from .persist import read_current_selection
from .render import summary_message

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

Selector = Callable[..., Outcome]


def _bounded_int_type(flag: str, low: int, high: int) -> Callable[[str], int]:
    def parse(value: str) -> int:
        try:
            number = int(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"{flag} must be an integer") from exc
        if number < low or number > high:
            raise argparse.ArgumentTypeError(f"{flag} must be between {low} and {high}")
        return number

    return parse


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goselect",
        description="Pick one of several side-by-side Go installations and record it as GOROOT.",
    )
    parser.add_argument(
        "root",
        type=Path,
        help="Directory containing the Go installations; the choice is written to ROOT/selected",
    )
    parser.add_argument(
        "--max-depth",
        type=_bounded_int_type("--max-depth", 0, MAX_DEPTH_LIMIT),
        default=None,
        help="Extra directory levels to search below ROOT (0 = immediate children)",
    )
    parser.add_argument(
        "--page-size",
        type=_bounded_int_type("--page-size", 1, PAGE_SIZE_LIMIT),
        default=None,
        help="Number of installations shown per page",
    )
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--log-level", type=_log_level_type, default=DEFAULT_LEVEL)
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def resolve_settings(namespace: argparse.Namespace, config: AppConfig) -> AppConfig:
    updates: dict[str, object] = {}
    if namespace.max_depth is not None:
        updates["max_depth"] = namespace.max_depth
    if namespace.page_size is not None:
        updates["page_size"] = namespace.page_size
    return config.model_copy(update=updates)


def load_catalog(root: Path, settings: AppConfig) -> Catalog:
    catalog = build_catalog(
        root,
        settings.max_depth,
        markers=settings.markers,
        version_file=settings.version_file,
    )
    if not catalog:
        raise EmptyCatalogError(
            f"No Go installations found in {root}",
            hint="Check --max-depth or the installation markers in your config.",
        )
    return catalog


def launch_tui(catalog: Catalog, root: Path, *, page_size: int, current: str = "") -> Outcome:
    from goselect.tui import run_tui

    return run_tui(catalog, root, page_size=page_size, current=current)


def run_selection(namespace: argparse.Namespace, selector: Selector) -> int:
    settings = resolve_settings(namespace, load_config(namespace.config))
    root: Path = namespace.root.expanduser().absolute()
    catalog = load_catalog(root, settings)
    current = read_current_selection(root)
    outcome = selector(catalog, root, page_size=settings.page_size, current=current)
    print(summary_message(outcome))
    return int(ExitCode.SUCCESS)


def main(
    argv: Sequence[str] | None = None,
    *,
    selector: Selector | None = None,
) -> int:
    log_path = default_log_path()
    logger = configure_logging(log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code in (None, 0):
            return int(ExitCode.SUCCESS)
        logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(ExitCode.FAILURE)

    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()
    logger = configure_logging(level=namespace.log_level, log_file=log_path)

    try:
        logger.debug("Starting selection root=%s", namespace.root)
        return run_selection(namespace, selector or launch_tui)
    except GoSelectError as exc:
        logger.error(
            "Handled %s (code=%s): %s",
            type(exc).__name__,
            int(exc.code),
            exc.message,
            exc_info=console_level(logger) <= py_logging.DEBUG,
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        try:
            hint = f"Inspect logs: {log_path}"
            print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        except Exception:
            pass
        return int(ExitCode.FAILURE)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
