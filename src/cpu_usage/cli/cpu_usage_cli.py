"""
`cpu-usage` command line interface that runs the periodic CPU usage report.
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Sequence

from ..core.config import DEFAULT_PERIOD, SOURCES, ReportConfig
from ..core.module import module_start, module_stop
from ..counters import DEFAULT_PROC_STAT
from ..exceptions import CounterSourceError


LOG = logging.getLogger("cpu_usage.cli")


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cpu-usage",
        description="Periodically log the average CPU load across all cores.",
    )
    parser.add_argument(
        "--period",
        type=int,
        default=DEFAULT_PERIOD,
        help="Period (in seconds) at which the CPU usage will be reported.",
    )
    parser.add_argument(
        "--source",
        choices=SOURCES,
        default="auto",
        help="Where per-core counters are read from (default: auto).",
    )
    parser.add_argument(
        "--proc-stat",
        type=Path,
        default=DEFAULT_PROC_STAT,
        help="Path of the procfs stat file used by the procfs source.",
    )
    parser.add_argument(
        "--log",
        type=str,
        default="INFO",
        help="Log level (DEBUG, INFO, WARNING, ERROR).",
    )
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_config(args: argparse.Namespace) -> ReportConfig:
    return ReportConfig(
        period=args.period,
        source=args.source,
        proc_stat_path=args.proc_stat,
        log_level=args.log,
    )


def main(argv: Sequence[str] | None = None, stop_requested: threading.Event | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        config = build_config(args)
    except ValueError as exc:
        configure_logging("INFO")
        LOG.error("Invalid configuration: %s", exc)
        return 1
    configure_logging(config.log_level)

    stop_requested = stop_requested or threading.Event()
    installed = threading.current_thread() is threading.main_thread()
    if installed:
        previous_handler = signal.signal(signal.SIGTERM, lambda signum, frame: stop_requested.set())

    try:
        try:
            scheduler = module_start(config)
        except CounterSourceError as exc:
            LOG.error("Could not take the initial CPU reading: %s", exc)
            return 1
        if scheduler is None:
            return 1
        try:
            stop_requested.wait()
        except KeyboardInterrupt:
            LOG.info("Interrupted, shutting down...")
        finally:
            module_stop(scheduler)
        return 0
    finally:
        if installed:
            signal.signal(
                signal.SIGTERM,
                signal.SIG_DFL if previous_handler is None else previous_handler,
            )


if __name__ == "__main__":
    raise SystemExit(main())
