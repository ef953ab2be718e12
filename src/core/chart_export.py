import logging
import os
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")  # no display needed for file output
import matplotlib.pyplot as plt  # noqa: E402

logger = logging.getLogger(__name__)


def save_chart(
    sequences: Sequence[int],
    latencies: Sequence[float],
    path,
    title: str,
    threshold_ms: Optional[float] = None,
):
    """
    Write a latency-over-probes line chart to ``path`` (format from the suffix).

    Raises OSError if the file cannot be written, ValueError if matplotlib
    has no writer for the suffix.
    """
    directory = os.path.dirname(os.fspath(path))
    if directory:
        os.makedirs(directory, exist_ok=True)

    fig = plt.figure()
    try:
        plt.plot(sequences, latencies, marker="o", label="Latency (ms)")
        if threshold_ms is not None:
            plt.axhline(threshold_ms, color="red", linestyle="--", label="Threshold")
        plt.xlabel("Probe")
        plt.ylabel("Latency (ms)")
        plt.title(title)
        plt.legend()
        plt.tight_layout()
        plt.savefig(path)
    finally:
        plt.close(fig)
    logger.info(f"Saved latency chart to {path}")
