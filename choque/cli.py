"""Command-line entry point.

Usage:
    choque start                                   # Probe configured URLs forever
    choque add --url https://example.com --interval 300
    choque report                                  # Print and log a summary
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

import structlog

from . import __version__
from .config import add_target, load_config, save_config
from .errors import ConfigError, MissingArgumentError, NoTargetsConfiguredError
from .intervals import format_seconds
from .probe_log import ProbeLog
from .reporting import publish_report
from .scheduler import ProbeScheduler
from .settings import RuntimeSettings

logger = structlog.get_logger(__name__)


def _stderr_logger_factory(*args) -> structlog.PrintLogger:
    # Looked up per logger so a redirected sys.stderr is honoured.
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )

    # Request lines from the HTTP stack would duplicate the probe log.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_parser(settings: RuntimeSettings | None = None) -> argparse.ArgumentParser:
    settings = settings or RuntimeSettings()

    parser = argparse.ArgumentParser(prog="choque", description="CLI tool to keep servers alive by pinging URLs")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=settings.config_path, help="Path to the JSON config")
    parser.add_argument("--log-file", default=settings.log_path, help="Path to the probe log")
    parser.add_argument("--log-level", default=settings.log_level, help="Diagnostics level (INFO, DEBUG, ...)")
    parser.set_defaults(timeout=settings.probe_timeout_seconds)

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("start", help="Start pinging configured URLs")

    add = sub.add_parser("add", help="Add a URL to ping")
    # Presence is checked by hand so a missing flag is logged like any other error.
    add.add_argument("--url", help="URL to ping")
    add.add_argument("--interval", help="Ping interval in seconds")

    sub.add_parser("report", help="Generate a summary report")
    return parser


def _parse_add_arguments(args: argparse.Namespace) -> tuple[str, int]:
    if not args.url or args.interval is None:
        raise MissingArgumentError("Both --url and --interval are required.")
    try:
        seconds = int(str(args.interval).strip())
    except ValueError:
        raise MissingArgumentError(f"--interval must be a whole number of seconds, got {args.interval!r}.") from None
    if seconds == 0:
        raise MissingArgumentError("Both --url and --interval are required.")
    return args.url, seconds


def cmd_start(args: argparse.Namespace, sink: ProbeLog) -> int:
    try:
        config = load_config(args.config)
    except ConfigError as e:
        sink.error(str(e))
        return 1

    scheduler = ProbeScheduler(sink, timeout_seconds=args.timeout)
    try:
        asyncio.run(scheduler.run(config))
    except NoTargetsConfiguredError as e:
        sink.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
        return 130
    return 0


def cmd_add(args: argparse.Namespace, sink: ProbeLog) -> int:
    try:
        url, seconds = _parse_add_arguments(args)
        config = load_config(args.config)
    except (MissingArgumentError, ConfigError) as e:
        sink.error(str(e))
        return 1

    target = add_target(config, url, seconds * 1000)
    save_config(config, args.config)
    sink.info(f"Added {target.url} with interval {format_seconds(target.interval)}s")
    return 0


def cmd_report(args: argparse.Namespace, sink: ProbeLog) -> int:
    publish_report(args.log_file, sink)
    return 0


COMMANDS = {
    "start": cmd_start,
    "add": cmd_add,
    "report": cmd_report,
}


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    with ProbeLog(args.log_file, console=sys.stdout) as sink:
        return COMMANDS[args.command](args, sink)


if __name__ == "__main__":
    raise SystemExit(main())
