import asyncio
import logging
import math
import platform
import shutil
from typing import List, Optional

from abstractions.latency_source import DEFAULT_PROBE_TIMEOUT_SECONDS, LatencySource
from core.ping_parser import parse_latency
from core.profiler import Profiler

logger = logging.getLogger(__name__)

DEFAULT_PING_BIN = shutil.which("ping") or "ping"


def get_platform_type() -> str:
    system = platform.system().lower()
    if system == "windows":
        return "windows"
    if system == "linux":
        return "linux"
    # macOS and the BSDs share the same flags
    return "bsd"


class PingLatencySource(LatencySource):
    """
    Latency source that runs the platform ``ping`` utility for a single echo
    request and parses the round-trip time from its output.
    """

    def __init__(
        self,
        ping_bin: str = DEFAULT_PING_BIN,
        platform_type: Optional[str] = None,
        grace_seconds: float = 1.0,
    ):
        """
        Args:
            ping_bin (str): Path or name of the ping executable.
            platform_type (Optional[str]): "linux", "bsd" or "windows"; detected if None.
            grace_seconds (float): Extra time granted to the process beyond the
                probe timeout before it is killed.
        """
        self.ping_bin = ping_bin
        self.platform_type = platform_type or get_platform_type()
        self.grace_seconds = grace_seconds

    def build_command(self, target: str, timeout: float) -> List[str]:
        wait_seconds = max(1, math.ceil(timeout))
        if self.platform_type == "windows":
            return [self.ping_bin, "-n", "1", "-w", str(int(timeout * 1000)), target]
        if self.platform_type == "linux":
            return [self.ping_bin, "-c", "1", "-W", str(wait_seconds), target]
        return [self.ping_bin, "-c", "1", "-t", str(wait_seconds), target]

    async def _run(self, cmd: List[str], timeout: float) -> Optional[str]:
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            logger.error(f"Could not start {cmd[0]}: {e}")
            return None

        try:
            stdout, _ = await asyncio.wait_for(
                proc.communicate(), timeout=timeout + self.grace_seconds
            )
        except asyncio.TimeoutError:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()
            logger.warning(f"ping did not finish within {timeout:.1f}s; killed")
            return None

        if proc.returncode != 0:
            logger.debug(f"ping exited with status {proc.returncode}")
        return stdout.decode(errors="replace")

    @Profiler.profile
    async def probe(
        self, target: str, timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS
    ) -> Optional[float]:
        if target.startswith("-"):
            # would be read as a ping option
            logger.warning(f"Refusing to probe target that looks like an option: {target}")
            return None

        output = await self._run(self.build_command(target, timeout), timeout)
        if output is None:
            return None
        latency = parse_latency(output)
        if latency is None:
            logger.info(f"No reply from {target}")
        return latency
