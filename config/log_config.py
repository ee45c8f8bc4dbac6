"""
Log config values for logging logs
"""

import os


class LogConfig:
    DEFAULT_LOG_DOMAIN = "adminsite"
    VERBOSE = os.environ.get("ADMINSITE_LOG_VERBOSE", "0") == "1"
    ENABLED = os.environ.get("ADMINSITE_ENABLE_LOGGING", "1") != "0"
    LOG_DIR = os.environ.get("ADMINSITE_LOG_DIR", "logs")
    # Maximum size of a log file before a new one is created
    MAX_LOG_FILE_BYTES = 10 * 1024 * 1024  # 10 MB
