"""Logging system for the admin site client and proxies."""

import csv
import threading
from dataclasses import dataclass, asdict, field, fields
from datetime import datetime
from typing import Dict, Type, Optional
from pathlib import Path
from config import LogConfig

@dataclass
class LogEvent:
    """Base class for all log events."""
    timestamp: Optional[datetime] = field(default=None, init=False)

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now()

@dataclass
class ErrorEvent(LogEvent):
    """Log event for error conditions."""
    error_type: str
    message: str
    source: str
    context: Optional[str] = None

@dataclass
class APIEvent(LogEvent):
    """Interaction event with API"""
    type: str
    message: str

@dataclass
class CacheEvent(LogEvent):
    """Cache invalidation performed by the API client."""
    action: str
    prefix: Optional[str] = None
    removed: int = 0

@dataclass
class ProxyEvent(LogEvent):
    """Outcome of a single proxy invocation."""
    proxy: str
    action: str
    status_code: int
    target: Optional[str] = None

@dataclass
class NotificationEvent(LogEvent):
    """A notification shown to the admin user."""
    type: str
    message: str


class Logger:
    """Thread-safe logger that writes events to domain-specific CSV files."""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self.log_dir = Path(LogConfig.LOG_DIR)
            self._file_handles: Dict[str, Dict[str, tuple[Path, list[str]]]] = {}
            self._initialized = True

    def _rotate_if_needed(
        self,
        domain: str,
        event_name: str,
        csv_path: Path,
        headers: list[str],
    ) -> Path:
        """Rotate log file if it would exceed MAX_LOG_FILE_BYTES."""
        max_bytes = LogConfig.MAX_LOG_FILE_BYTES
        if csv_path.exists() and csv_path.stat().st_size >= max_bytes:
            domain_dir = csv_path.parent
            index = 2
            while True:
                new_path = domain_dir / f"{event_name}_{index}.csv"
                if not new_path.exists() or new_path.stat().st_size < max_bytes:
                    if not new_path.exists():
                        with open(new_path, "w", newline="") as f:
                            csv.writer(f).writerow(headers)
                    csv_path = new_path
                    break
                index += 1
            self._file_handles[domain][event_name] = (csv_path, headers)
        return csv_path

    def _ensure_log_file(self, domain: str, event_type: Type[LogEvent]) -> tuple[Path, list[str]]:
        """Ensure the log file exists and return its path and headers."""
        handles = self._file_handles.setdefault(domain, {})
        event_name = event_type.__name__.lower()

        if event_name not in handles:
            domain_dir = self.log_dir / domain
            domain_dir.mkdir(parents=True, exist_ok=True)

            csv_path = domain_dir / f"{event_name}.csv"
            headers = [f.name for f in fields(event_type)]

            if not csv_path.exists():
                with open(csv_path, 'w', newline='') as f:
                    csv.writer(f).writerow(headers)

            handles[event_name] = (csv_path, headers)

        return handles[event_name]

    def log(self, event: LogEvent, domain=LogConfig.DEFAULT_LOG_DOMAIN) -> None:
        """Log an event to its domain-specific CSV file.

        Args:
            event: The event to log
            domain: The logging domain (e.g. "api", "proxy", "ui")
        """
        if not LogConfig.ENABLED:
            return
        event_dict = asdict(event)
        event_name = type(event).__name__.lower()

        # File handle bookkeeping, rotation and the write happen under one lock
        with self._lock:
            csv_path, headers = self._ensure_log_file(domain, type(event))
            row = [str(event_dict.get(header, '')) for header in headers]
            csv_path = self._rotate_if_needed(domain, event_name, csv_path, headers)

            if LogConfig.VERBOSE:
                print(f"{type(event).__name__}:", str(row))

            with open(csv_path, 'a', newline='') as f:
                csv.writer(f).writerow(row)


# Global logger instance
logger = Logger()
