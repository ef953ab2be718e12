import logging
import os
import tempfile
import unittest

from config import logging_config
from config.config import Config


class TestConfig(unittest.TestCase):
    def test_config_defaults(self):
        self.assertEqual(Config.TARGET, "google.com")
        self.assertEqual(Config.COUNT, 10)
        self.assertEqual(Config.INTERVAL_SECONDS, 1)
        self.assertEqual(Config.LOG_PATH, "ping_log.txt")
        self.assertEqual(Config.HIGH_LATENCY_THRESHOLD_MS, 100.0)
        self.assertEqual(Config.SOURCE, "icmp")
        self.assertIsInstance(Config.PROBE_TIMEOUT_SECONDS, float)
        self.assertIsInstance(Config.CHART_WIDTH, int)
        self.assertIsInstance(Config.CHART_HEIGHT, int)

    def test_config_env_override(self):
        os.environ["PROBE_TARGET"] = "example.org"
        os.environ["PROBE_COUNT"] = "0"
        import importlib

        import config.config as config_mod

        try:
            importlib.reload(config_mod)
            self.assertEqual(config_mod.Config.TARGET, "example.org")
            self.assertEqual(config_mod.Config.COUNT, 0)
        finally:
            del os.environ["PROBE_TARGET"]
            del os.environ["PROBE_COUNT"]
            importlib.reload(config_mod)


class TestLoggingConfig(unittest.TestCase):
    def tearDown(self):
        logging_config.setup_logging()

    def test_logging_setup(self):
        # Should not raise
        try:
            logging_config.setup_logging()
        except Exception as e:
            self.fail(f"setup_logging() raised {e}")
        logger = logging.getLogger()
        self.assertTrue(logger.hasHandlers())

    def test_console_only_without_log_file(self):
        config = logging_config.build_logging_config(level="info", log_file="")
        self.assertEqual(list(config["handlers"]), ["console"])
        self.assertEqual(config["root"]["level"], "INFO")

    def test_log_file_directory_is_created(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "nested", "probe.log")
            logging_config.setup_logging(level="DEBUG", log_file=path)
            logging.getLogger("test").debug("hello")
            self.assertTrue(os.path.exists(path))
            logging_config.setup_logging(log_file="")


if __name__ == "__main__":
    unittest.main()
