import logging
import math
from typing import Iterable

from contracts.probe_outcome import ProbeOutcome
from contracts.run_summary import RunSummary
from core.profiler import Profiler

logger = logging.getLogger(__name__)


@Profiler.profile
def summarize(outcomes: Iterable[ProbeOutcome]) -> RunSummary:
    """
    Reduce a finished outcome sequence to a RunSummary.

    Loss is measured against all probes (0 when there were none); latency
    statistics cover successful probes only.
    """
    total = 0
    successful = 0
    lowest = math.inf
    highest = -math.inf
    acc = 0.0
    acc_sq = 0.0

    for outcome in outcomes:
        total += 1
        if not outcome.success:
            continue
        latency = outcome.latency_ms
        successful += 1
        lowest = min(lowest, latency)
        highest = max(highest, latency)
        acc += latency
        acc_sq += latency * latency

    if total == 0:
        logger.debug("Summarizing an empty run")
        return RunSummary()

    loss_ratio = (total - successful) / total
    if successful == 0:
        return RunSummary(total=total, successful=0, loss_ratio=loss_ratio)

    mean = acc / successful
    variance = max(acc_sq / successful - mean * mean, 0.0)
    return RunSummary(
        total=total,
        successful=successful,
        loss_ratio=loss_ratio,
        min_ms=lowest,
        max_ms=highest,
        mean_ms=mean,
        stddev_ms=math.sqrt(variance),
    )
