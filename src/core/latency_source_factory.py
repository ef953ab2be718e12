"""
Latency source factory for creating probe implementations by name.
"""
import logging
from typing import Optional

from abstractions.latency_source import LatencySource
from config.config import Config
from core.fake_latency_source import FakeLatencySource
from core.http_latency_source import HttpLatencySource
from core.ping_latency_source import PingLatencySource

logger = logging.getLogger(__name__)

# Replayed by the "fake" source so a run can be tried without network access
DEMO_SCRIPT = (12.4, 14.1, 13.7, None, 18.9, 121.5, 15.2, 0.5, 13.3, 16.8)


class LatencySourceFactory:
    """
    Factory class for creating latency source instances.
    """

    SUPPORTED_TYPES = ("icmp", "http", "fake")

    @staticmethod
    def create_source(source_type: Optional[str] = None, **kwargs) -> LatencySource:
        """
        Create a latency source based on configuration.

        Args:
            source_type (Optional[str]): "icmp", "http" or "fake".
                                         If None, uses Config.SOURCE.
            **kwargs: Additional keyword arguments for the specific source.

        Returns:
            LatencySource: A latency source instance.

        Raises:
            ValueError: If an unsupported source type is specified.
        """
        source_type = (source_type or Config.SOURCE).lower()
        logger.info(f"Creating {source_type} latency source")

        if source_type == "icmp":
            return PingLatencySource(**kwargs)
        elif source_type == "http":
            return HttpLatencySource(**kwargs)
        elif source_type == "fake":
            kwargs.setdefault("script", DEMO_SCRIPT)
            kwargs.setdefault("cycle", True)
            return FakeLatencySource(**kwargs)
        else:
            raise ValueError(
                f"Unsupported latency source: {source_type}. "
                f"Supported types: {list(LatencySourceFactory.SUPPORTED_TYPES)}"
            )
