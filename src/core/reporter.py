import logging
import os
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from abstractions.visualizer import Visualizer
from contracts.probe_outcome import ProbeOutcome
from contracts.run_configuration import RunConfiguration
from contracts.run_summary import RunSummary
from core.chart_export import save_chart
from core.metrics_manager import MetricsManager
from core.profiler import Profiler
from core.sample_reducer import summarize
from core.visualizer import TextChartVisualizer

logger = logging.getLogger(__name__)

FAILURE_MARKER = "Request timed out / unreachable"
NO_SUCCESS_MESSAGE = "No successful probes; nothing to plot."
LOG_SEPARATOR = "-" * 40


def format_outcome(outcome: ProbeOutcome, threshold_ms: float) -> str:
    if not outcome.success:
        return f"Ping {outcome.sequence}: {FAILURE_MARKER}"
    line = f"Ping {outcome.sequence}: {outcome.latency_ms:.2f} ms"
    if outcome.latency_ms > threshold_ms:
        line += f" [HIGH LATENCY > {threshold_ms:g} ms]"
    return line


def format_log_line(outcome: ProbeOutcome) -> str:
    stamp = outcome.timestamp.strftime("%H:%M:%S")
    if outcome.success:
        return f"[{stamp}] Ping {outcome.sequence}: {outcome.latency_ms:.2f} ms"
    return f"[{stamp}] Ping {outcome.sequence}: FAILED"


def format_summary(target: str, summary: RunSummary) -> List[str]:
    lines = [
        f"--- {target} latency statistics ---",
        f"{summary.total} probes transmitted, {summary.successful} received, "
        f"{summary.loss_percent:.1f}% loss",
    ]
    if summary.successful:
        lines.append(
            f"min/avg/max/stddev = {summary.min_ms:.2f}/{summary.mean_ms:.2f}/"
            f"{summary.max_ms:.2f}/{summary.stddev_ms:.2f} ms"
        )
    return lines


class Reporter:
    """
    End-of-run sink: prints per-probe lines, statistics and a chart, then
    persists the run log. Persistence problems are reported, never raised.
    """

    def __init__(
        self,
        visualizer: Optional[Visualizer] = None,
        metrics: Optional[MetricsManager] = None,
        echo: Callable[[str], None] = print,
    ):
        self.visualizer = visualizer or TextChartVisualizer()
        self.metrics = metrics
        self.echo = echo

    @Profiler.profile
    def report(self, config: RunConfiguration, outcomes: Sequence[ProbeOutcome]) -> RunSummary:
        """
        Present and persist a finished run.

        Args:
            config (RunConfiguration): Settings the run was made with.
            outcomes (Sequence[ProbeOutcome]): Outcomes in sequence order.

        Returns:
            RunSummary: The statistics that were printed.
        """
        for outcome in outcomes:
            self.echo(format_outcome(outcome, config.threshold_ms))
            if self.metrics:
                self.metrics.record(outcome, config.threshold_ms)

        summary = summarize(outcomes)
        self.echo("")
        for line in format_summary(config.target, summary):
            self.echo(line)

        successes = [o for o in outcomes if o.success]
        latencies = [o.latency_ms for o in successes]
        self.echo("")
        if latencies:
            caption = f"Latency (ms) to {config.target}, {len(latencies)} samples"
            self.echo(
                self.visualizer.plot(
                    latencies, config.chart_width, config.chart_height, caption
                )
            )
        else:
            self.echo(NO_SUCCESS_MESSAGE)

        if self.write_log(config, outcomes):
            self.echo(f"Log saved to {config.log_path}")

        if config.plot_path and latencies:
            try:
                save_chart(
                    [o.sequence for o in successes],
                    latencies,
                    config.plot_path,
                    f"Latency to {config.target}",
                    config.threshold_ms,
                )
                self.echo(f"Chart saved to {config.plot_path}")
            except (OSError, ValueError) as e:
                self._warn(f"could not save chart to {config.plot_path}: {e}")

        if self.metrics:
            self.metrics.record_summary(summary)
            if config.metrics_path:
                try:
                    self.metrics.write_textfile(config.metrics_path)
                except OSError as e:
                    self._warn(f"could not write metrics to {config.metrics_path}: {e}")

        return summary

    def write_log(
        self,
        config: RunConfiguration,
        outcomes: Sequence[ProbeOutcome],
        generated_at: Optional[datetime] = None,
    ) -> bool:
        generated_at = generated_at or datetime.now()
        lines = [
            f"Latency log for {config.target} - generated {generated_at:%Y-%m-%d %H:%M:%S}",
            LOG_SEPARATOR,
        ]
        lines.extend(format_log_line(o) for o in outcomes)

        try:
            directory = os.path.dirname(os.fspath(config.log_path))
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(config.log_path, "w", encoding="utf-8") as f:
                f.write("\n".join(lines) + "\n")
        except OSError as e:
            self._warn(f"could not write log to {config.log_path}: {e}")
            return False
        logger.info(f"Wrote {len(outcomes)} outcome(s) to {config.log_path}")
        return True

    def _warn(self, message: str):
        logger.error(message)
        self.echo(f"Warning: {message}")
