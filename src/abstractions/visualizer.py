from abc import ABC, abstractmethod
from typing import Sequence

NO_DATA_MESSAGE = "No data to display"


class Visualizer(ABC):
    """
    Abstract base class for text chart renderers used by the reporter.
    """

    @abstractmethod
    def plot(
        self, latencies: Sequence[float], width: int, height: int, caption: str = ""
    ) -> str:
        """
        Render latencies as a bounded text chart.

        Args:
            latencies (Sequence[float]): Successful latencies in sample order.
            width (int): Maximum number of plot columns.
            height (int): Number of plot rows.
            caption (str): Text shown under the chart.

        Returns:
            str: The rendered chart, or NO_DATA_MESSAGE when latencies is empty.
        """
