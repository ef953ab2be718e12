import logging
import time
from typing import Optional

import httpx

from abstractions.latency_source import DEFAULT_PROBE_TIMEOUT_SECONDS, LatencySource
from core.profiler import Profiler

logger = logging.getLogger(__name__)


class HttpLatencySource(LatencySource):
    """
    Latency source that times a single HTTP request to the target. Useful where
    ICMP is filtered or the ping utility is unavailable.
    """

    def __init__(self, method: str = "HEAD", scheme: str = "https", path: str = "/"):
        self.method = method
        self.scheme = scheme
        self.path = path

    def build_url(self, target: str) -> str:
        if "://" in target:
            return target
        return f"{self.scheme}://{target}{self.path}"

    @Profiler.profile
    async def probe(
        self, target: str, timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS
    ) -> Optional[float]:
        url = self.build_url(target)
        try:
            async with httpx.AsyncClient(follow_redirects=False) as client:
                start = time.perf_counter()
                resp = await client.request(self.method, url, timeout=timeout)
                elapsed_ms = (time.perf_counter() - start) * 1000.0
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.info(f"HTTP probe error for {url}: {e}")
            return None

        if resp.status_code >= 500:
            logger.info(f"HTTP probe failed for {url}: status={resp.status_code}")
            return None
        logger.debug(f"HTTP probe for {url}: status={resp.status_code} {elapsed_ms:.2f}ms")
        return elapsed_ms
