# Usage examples:
#   latency-probe
#   latency-probe -target 1.1.1.1 -count 0 -interval 2 -threshold 50
#   latency-probe -target example.com -source http -plot chart.png
#   latency-probe -source fake -count 20

import argparse
import asyncio
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from abstractions.latency_source import LatencySource
from config.config import Config
from config.logging_config import setup_logging
from contracts.run_configuration import RunConfiguration
from contracts.run_summary import RunSummary
from core.cancellation import CancellationSignal, cancel_on_signals
from core.latency_source_factory import LatencySourceFactory
from core.metrics_manager import MetricsManager
from core.reporter import Reporter
from core.sampler import Sampler

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_argparser():
    ap = argparse.ArgumentParser(
        prog="latency-probe",
        description="Probe a host at a fixed cadence and report latency statistics",
    )
    ap.add_argument("-target", "--target", default=Config.TARGET, help="Host to probe")
    ap.add_argument("-count", "--count", type=int, default=Config.COUNT,
                    help="Number of probes (0 = until interrupted)")
    ap.add_argument("-interval", "--interval", type=int, default=Config.INTERVAL_SECONDS,
                    help="Seconds between probes (minimum 1)")
    ap.add_argument("-log", "--log", default=Config.LOG_PATH, help="File to write the run log to")
    ap.add_argument("-threshold", "--threshold", type=float, default=Config.HIGH_LATENCY_THRESHOLD_MS,
                    help="Latency in ms above which a probe is flagged")
    ap.add_argument("-source", "--source", default=Config.SOURCE,
                    choices=list(LatencySourceFactory.SUPPORTED_TYPES),
                    help="How to measure latency")
    ap.add_argument("-timeout", "--timeout", type=float, default=Config.PROBE_TIMEOUT_SECONDS,
                    help="Per-probe timeout in seconds")
    ap.add_argument("-width", "--width", type=int, default=Config.CHART_WIDTH, help="Chart width in columns")
    ap.add_argument("-height", "--height", type=int, default=Config.CHART_HEIGHT, help="Chart height in rows")
    ap.add_argument("-plot", "--plot", default=None, help="Also save the chart as an image (e.g. chart.png)")
    ap.add_argument("-metrics", "--metrics", default=None,
                    help="Write Prometheus metrics to this textfile")
    ap.add_argument("-log-level", "--log-level", default=None, type=str.upper, choices=LOG_LEVELS,
                    help="Diagnostic log level (default: LOG_LEVEL)")
    return ap


def config_from_args(args) -> RunConfiguration:
    """
    Raises pydantic.ValidationError if a value is out of range.
    """
    return RunConfiguration(
        target=args.target,
        count=args.count,
        interval=args.interval,
        threshold_ms=args.threshold,
        log_path=args.log,
        source=args.source,
        probe_timeout=args.timeout,
        chart_width=args.width,
        chart_height=args.height,
        plot_path=args.plot,
        metrics_path=args.metrics,
    )


def describe_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'config'}: {err['msg']}"
        for err in error.errors()
    )


async def run_probe(
    config: RunConfiguration,
    source: Optional[LatencySource] = None,
    reporter: Optional[Reporter] = None,
    cancel: Optional[CancellationSignal] = None,
) -> RunSummary:
    source = source or LatencySourceFactory.create_source(config.source)
    cancel = cancel or CancellationSignal()
    sampler = Sampler(source)

    with cancel_on_signals(cancel):
        outcomes = await sampler.run(config, cancel)

    if cancel.is_set():
        print(f"\nInterrupted ({cancel.reason}); reporting {len(outcomes)} probe(s).")
    reporter = reporter or Reporter(metrics=MetricsManager())
    return reporter.report(config, outcomes)


def main(argv=None) -> int:
    args = build_argparser().parse_args(argv)
    try:
        setup_logging(args.log_level)
    except ValueError as e:
        print(f"Configuration error: logging: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        config = config_from_args(args)
    except ValidationError as e:
        print(f"Configuration error: {describe_validation_error(e)}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    logger.debug(f"Run configuration: {config!r}")

    budget = "until interrupted" if config.unbounded else f"{config.count} probe(s)"
    print(
        f"Probing {config.target} via {config.source} every {config.interval:g}s, {budget}. "
        "Press Ctrl+C to stop."
    )
    asyncio.run(run_probe(config))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
