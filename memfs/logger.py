"""
memfs Logger Module

Structured logging for the in-memory filesystem:
- Subsystem-specific loggers (filesystem, buffer, config)
- Contextual key/value data attached to every record
- Optional console and file output
- An in-memory event buffer for inspection from tests and tools

The package installs a NullHandler on the 'memfs' logger, so nothing is
emitted until Logger.initialize() is called or the application configures
logging itself.

Author: YSNRFD
Version: 1.0.0
"""

import logging
import sys
import threading
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Optional, Any, List


ROOT_LOGGER_NAME = 'memfs'

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class LogLevel(IntEnum):
    """Log level enumeration with numeric values for comparison."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogFormatter(logging.Formatter):
    """
    Log formatter for memfs.

    Output format:
        [2024-01-01 12:00:00.000] DEBUG    [filesystem] Created file {path=/a mode=0o666}
    """

    # ANSI color codes for terminal output
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and self._supports_color()

    @staticmethod
    def _supports_color() -> bool:
        """Check if the terminal supports ANSI colors."""
        if not hasattr(sys.stdout, 'isatty'):
            return False
        return sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        timestamp = datetime.fromtimestamp(record.created).strftime(
            '%Y-%m-%d %H:%M:%S.%f'
        )[:-3]

        level = record.levelname
        if self.use_colors and level in self.COLORS:
            level_display = f"{self.COLORS[level]}{level:8s}{self.RESET}"
        else:
            level_display = f"{level:8s}"

        components = [f"[{timestamp}]", level_display]

        if hasattr(record, 'subsystem'):
            components.append(f"[{record.subsystem}]")

        components.append(str(record.getMessage()))

        if hasattr(record, 'context') and record.context:
            context_str = " ".join(f"{k}={v}" for k, v in record.context.items())
            components.append(f"{{{context_str}}}")

        message = " ".join(components)

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


class EventLogHandler(logging.Handler):
    """
    Keeps the most recent log records in memory.

    Records are stored as plain dictionaries so callers can filter them
    without holding on to LogRecord objects.
    """

    def __init__(self, max_entries: int = 10000):
        super().__init__()
        self.max_entries = max_entries
        self._events: List[dict[str, Any]] = []
        self._lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        """Store log record in buffer."""
        event = {
            'timestamp': record.created,
            'level': record.levelname,
            'message': record.getMessage(),
            'subsystem': getattr(record, 'subsystem', None),
            'context': getattr(record, 'context', {}),
        }

        with self._lock:
            self._events.append(event)
            if len(self._events) > self.max_entries:
                self._events = self._events[-self.max_entries:]

    def get_events(
        self,
        level: Optional[str] = None,
        subsystem: Optional[str] = None,
        limit: int = 100
    ) -> List[dict[str, Any]]:
        """Retrieve events with optional filtering."""
        with self._lock:
            events = self._events.copy()

        if level:
            events = [e for e in events if e['level'] == level]

        if subsystem:
            events = [e for e in events if e['subsystem'] == subsystem]

        return events[-limit:]

    def clear(self) -> None:
        """Clear the event buffer."""
        with self._lock:
            self._events.clear()


class Logger:
    """
    Subsystem logger for memfs.

    One instance exists per subsystem name; asking for the same subsystem
    twice returns the same object.

    Example:
        >>> log = Logger('filesystem')
        >>> log.debug("Created directory", context={'path': '/tmp'})
    """

    _instances: dict[str, 'Logger'] = {}
    _lock = threading.Lock()
    _initialized = False
    _event_handler: Optional[EventLogHandler] = None
    _handlers: List[logging.Handler] = []

    def __new__(cls, subsystem: str = 'filesystem') -> 'Logger':
        """Get or create a logger for a subsystem."""
        with cls._lock:
            if subsystem not in cls._instances:
                instance = super().__new__(cls)
                instance._subsystem = subsystem
                instance._logger = logging.getLogger(
                    f'{ROOT_LOGGER_NAME}.{subsystem}'
                )
                cls._instances[subsystem] = instance
            return cls._instances[subsystem]

    def __init__(self, subsystem: str = 'filesystem'):
        # State is set once in __new__; repeated construction is a lookup.
        pass

    @property
    def subsystem(self) -> str:
        return self._subsystem

    @classmethod
    def initialize(
        cls,
        level: int = LogLevel.INFO,
        log_file: Optional[str] = None,
        use_colors: bool = True,
        console_output: bool = True
    ) -> None:
        """
        Initialize the logging system.

        Calling it again after a successful initialization does nothing;
        use reset() first to change the configuration.

        Args:
            level: Minimum log level to capture
            log_file: Optional file path for log output
            use_colors: Whether to use ANSI colors in console output
            console_output: Whether to log to stdout
        """
        with cls._lock:
            if cls._initialized:
                return

            root_logger = logging.getLogger(ROOT_LOGGER_NAME)
            root_logger.setLevel(level)

            cls._event_handler = EventLogHandler()
            cls._event_handler.setLevel(level)
            cls._handlers = [cls._event_handler]

            if console_output:
                console_handler = logging.StreamHandler(sys.stdout)
                console_handler.setLevel(level)
                console_handler.setFormatter(LogFormatter(use_colors=use_colors))
                cls._handlers.append(console_handler)

            if log_file:
                file_path = Path(log_file)
                file_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_file)
                file_handler.setLevel(level)
                file_handler.setFormatter(LogFormatter(use_colors=False))
                cls._handlers.append(file_handler)

            for handler in cls._handlers:
                root_logger.addHandler(handler)

            cls._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Remove the handlers installed by initialize()."""
        with cls._lock:
            root_logger = logging.getLogger(ROOT_LOGGER_NAME)
            for handler in cls._handlers:
                root_logger.removeHandler(handler)
                handler.close()
            root_logger.setLevel(logging.NOTSET)
            cls._handlers = []
            cls._event_handler = None
            cls._initialized = False

    @classmethod
    def get_events(
        cls,
        level: Optional[str] = None,
        subsystem: Optional[str] = None,
        limit: int = 100
    ) -> List[dict[str, Any]]:
        """Get records captured by the in-memory event buffer."""
        if cls._event_handler is None:
            return []
        return cls._event_handler.get_events(
            level=level, subsystem=subsystem, limit=limit
        )

    def _log(
        self,
        level: int,
        message: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        extra = {
            'subsystem': self._subsystem,
            'context': context or {},
        }
        self._logger.log(level, message, extra=extra)

    def debug(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        """Log a debug message."""
        self._log(LogLevel.DEBUG, message, context)

    def info(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        """Log an info message."""
        self._log(LogLevel.INFO, message, context)

    def warning(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        """Log a warning message."""
        self._log(LogLevel.WARNING, message, context)


def get_logger(subsystem: str) -> Logger:
    """
    Get a logger for the specified subsystem.

    Args:
        subsystem: Name of the subsystem (e.g., 'filesystem', 'buffer')

    Returns:
        Logger instance for the subsystem
    """
    return Logger(subsystem)
