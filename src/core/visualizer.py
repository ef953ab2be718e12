import logging
from typing import List, Sequence

from abstractions.visualizer import NO_DATA_MESSAGE, Visualizer

logger = logging.getLogger(__name__)


def resample(values: Sequence[float], width: int) -> List[float]:
    """
    Shrink a series to at most ``width`` points by averaging equal-sized buckets.
    """
    values = list(values)
    n = len(values)
    if n <= width:
        return values
    buckets = []
    for i in range(width):
        chunk = values[i * n // width:(i + 1) * n // width]
        buckets.append(sum(chunk) / len(chunk))
    return buckets


class TextChartVisualizer(Visualizer):
    """
    Plain-text line chart: one column per sample, y axis labelled in ms.
    """

    def __init__(self, point: str = "*", link: str = ":"):
        self.point = point
        self.link = link

    def plot(
        self, latencies: Sequence[float], width: int, height: int, caption: str = ""
    ) -> str:
        if not latencies:
            return NO_DATA_MESSAGE

        width = max(1, width)
        height = max(2, height)
        series = resample(latencies, width)

        lo, hi = min(series), max(series)
        if hi == lo:
            lo, hi = max(0.0, lo - 1.0), hi + 1.0
        scale = (height - 1) / (hi - lo)

        grid = [[" "] * len(series) for _ in range(height)]
        previous = None
        for x, value in enumerate(series):
            level = round((value - lo) * scale)
            if previous is not None and abs(level - previous) > 1:
                step = 1 if level > previous else -1
                for between in range(previous + step, level, step):
                    grid[height - 1 - between][x] = self.link
            grid[height - 1 - level][x] = self.point
            previous = level

        labels = [f"{hi - row * (hi - lo) / (height - 1):.2f}" for row in range(height)]
        label_width = max(len(label) for label in labels)

        lines = [
            f"{label:>{label_width}} | {''.join(cells)}".rstrip()
            for label, cells in zip(labels, grid)
        ]
        lines.append(f"{' ' * label_width} +-{'-' * len(series)}")
        if caption:
            lines.append(f"{' ' * label_width}   {caption}")
        return "\n".join(lines)
