import os


class Config:
    """
    Configuration class for environment variables and default settings.
    """

    TARGET = os.environ.get("PROBE_TARGET", "google.com")
    COUNT = int(os.environ.get("PROBE_COUNT", "10"))  # 0 means run until interrupted
    INTERVAL_SECONDS = int(os.environ.get("PROBE_INTERVAL", "1"))
    LOG_PATH = os.environ.get("PROBE_LOG_FILE", "ping_log.txt")
    HIGH_LATENCY_THRESHOLD_MS = float(os.environ.get("PROBE_THRESHOLD_MS", "100.0"))

    # Latency source selection: "icmp" (platform ping), "http" or "fake"
    SOURCE = os.environ.get("PROBE_SOURCE", "icmp")
    # Upper bound for a single probe, independent of the interval
    PROBE_TIMEOUT_SECONDS = float(os.environ.get("PROBE_TIMEOUT", "5.0"))

    CHART_WIDTH = int(os.environ.get("CHART_WIDTH", "60"))
    CHART_HEIGHT = int(os.environ.get("CHART_HEIGHT", "12"))
