"""
Extract a round-trip latency from the free-form text printed by ``ping``.

Understood reply dialects:

* Unix/macOS: ``64 bytes from 1.2.3.4: icmp_seq=1 ttl=117 time=12.3 ms``
* Windows:    ``Reply from 1.2.3.4: bytes=32 time=12ms TTL=117`` and ``time<1ms``

When no reply line carries a time, the summary lines are tried instead
(``rtt min/avg/max/mdev = ...``, ``round-trip min/avg/max/stddev = ...`` and
Windows ``Average = 12ms``).
"""
import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

# Windows reports replies faster than its 1 ms resolution as "time<1ms". Reading
# that as 0 would put false dips into the plotted series, so it is approximated
# as half a millisecond.
SUB_MILLISECOND_LATENCY_MS = 0.5

_SUB_UNIT_REPLY = re.compile(r"\btime\s*<\s*1\s*ms\b", re.IGNORECASE)
_REPLY_TIME = re.compile(r"\btime\s*[=:]\s*(\d+(?:\.\d+)?)\s*ms\b", re.IGNORECASE)
_UNIX_SUMMARY = re.compile(
    r"(?:rtt|round-trip)\s+min/avg/max/(?:mdev|stddev)\s*=\s*"
    r"[\d.]+/(\d+(?:\.\d+)?)/[\d.]+",
    re.IGNORECASE,
)
_WINDOWS_SUMMARY = re.compile(r"\bAverage\s*=\s*(\d+(?:\.\d+)?)\s*ms\b", re.IGNORECASE)


def parse_latency(output: str) -> Optional[float]:
    """
    Return the latency in milliseconds found in ``output``, or None.
    """
    if not output:
        return None

    for line in output.splitlines():
        if _SUB_UNIT_REPLY.search(line):
            return SUB_MILLISECOND_LATENCY_MS
        match = _REPLY_TIME.search(line)
        if match:
            return float(match.group(1))

    for pattern in (_UNIX_SUMMARY, _WINDOWS_SUMMARY):
        match = pattern.search(output)
        if match:
            value = float(match.group(1))
            return value if value > 0 else SUB_MILLISECOND_LATENCY_MS

    logger.debug(f"No latency found in ping output: {output[:200]!r}")
    return None
