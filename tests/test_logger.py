import unittest
import shutil
import csv
import threading
from pathlib import Path

from adminsite.logger import Logger, ErrorEvent, ProxyEvent
from config.log_config import LogConfig

class TestLogger(unittest.TestCase):
    def setUp(self):
        self.test_log_dir = Path("test_logs")

        # Enable logging for logger tests
        self.original_enabled = LogConfig.ENABLED
        LogConfig.ENABLED = True

        # Store original log directory and replace with test directory
        self.original_log_dir = Logger._instance.log_dir if Logger._instance else None
        Logger._instance = None  # Reset singleton
        logger = Logger()
        logger.log_dir = self.test_log_dir

    def tearDown(self):
        if self.original_log_dir:
            Logger._instance.log_dir = self.original_log_dir

        LogConfig.ENABLED = self.original_enabled

        shutil.rmtree(self.test_log_dir, ignore_errors=True)

    def test_log_error_event(self):
        """Test logging an error event."""
        logger = Logger()
        event = ErrorEvent(
            error_type="APIError",
            message="HTTP 503: down",
            source="AdminAPIClient",
        )
        logger.log(event, "api")

        log_file = self.test_log_dir / "api" / "errorevent.csv"
        self.assertTrue(log_file.exists())

        with open(log_file, 'r') as f:
            rows = list(csv.DictReader(f))
            self.assertEqual(len(rows), 1)
            row = rows[0]
            self.assertEqual(row['error_type'], "APIError")
            self.assertEqual(row['message'], "HTTP 503: down")
            self.assertEqual(row['source'], "AdminAPIClient")
            self.assertEqual(row['context'], "None")

    def test_multiple_events_same_type(self):
        """Test logging multiple events of the same type."""
        logger = Logger()
        for i in range(3):
            logger.log(ProxyEvent(proxy="github_proxy", action=f"action_{i}", status_code=200), "proxy")

        log_file = self.test_log_dir / "proxy" / "proxyevent.csv"
        with open(log_file, 'r') as f:
            rows = list(csv.DictReader(f))
            self.assertEqual(len(rows), 3)
            for i, row in enumerate(rows):
                self.assertEqual(row['action'], f"action_{i}")
                self.assertEqual(row['status_code'], "200")

    def test_disabled_logger_writes_nothing(self):
        LogConfig.ENABLED = False
        Logger().log(ErrorEvent(error_type="x", message="y", source="z"), "api")
        self.assertFalse((self.test_log_dir / "api").exists())

    def test_concurrent_threads_write_every_row(self):
        logger = Logger()

        def worker(n):
            for i in range(20):
                logger.log(ProxyEvent(proxy=f"worker_{n}", action=f"a{i}", status_code=200), "proxy")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        with open(self.test_log_dir / "proxy" / "proxyevent.csv", 'r') as f:
            rows = list(csv.DictReader(f))
        self.assertEqual(len(rows), 80)

    def test_log_rotation(self):
        """Test that log files rotate when exceeding max size."""
        logger = Logger()

        original_max = LogConfig.MAX_LOG_FILE_BYTES
        LogConfig.MAX_LOG_FILE_BYTES = 50

        try:
            # Precreate a file that already exceeds the limit
            domain_dir = self.test_log_dir / "api"
            domain_dir.mkdir(parents=True, exist_ok=True)
            oversized = domain_dir / "errorevent.csv"
            with open(oversized, "wb") as f:
                f.write(b"x" * 60)

            logger.log(ErrorEvent(error_type="APIError", message="A" * 10, source="AdminAPIClient"), "api")

            rotated = domain_dir / "errorevent_2.csv"
            self.assertTrue(rotated.exists())
        finally:
            LogConfig.MAX_LOG_FILE_BYTES = original_max

if __name__ == '__main__':
    unittest.main()
