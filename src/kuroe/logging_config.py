"""
Logging Configuration

Centralized logging setup for kuroe programs. Log records go to stderr
(or a file) and never replace the verdict line.

Records emitted during a run carry the program being run, and stream
failures carry the stream that failed:

    [12:00:01.250] INFO     [kuroe.verification.runner] <line> Starting line
    [12:00:01.251] DEBUG    [kuroe.stream.reader] <output:case.out> WRONG_ANSWER ...
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, MutableMapping, Optional, Tuple


class KuroeFormatter(logging.Formatter):
    """Custom formatter with color support and run context"""

    COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "INFO": "\033[32m",       # Green
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "CRITICAL": "\033[35m",   # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level = record.levelname

        if self.use_colors:
            color = self.COLORS.get(level, "")
            level = f"{color}{level}{self.RESET}"

        # Format: [TIME] LEVEL [module] <program stream> message
        parts = [
            f"[{timestamp}]",
            f"{level:8}",
            f"[{record.name}]",
        ]
        context = run_context(record)
        if context:
            parts.append(f"<{context}>")
        parts.append(record.getMessage())

        if record.exc_info:
            parts.append(self.formatException(record.exc_info))

        return " ".join(parts)


def run_context(record: logging.LogRecord) -> str:
    """Program and stream tags attached to a record, if any"""
    tags = [getattr(record, key, None) for key in ("program", "stream")]
    return " ".join(tag for tag in tags if tag)


class ProgramLogger(logging.LoggerAdapter):
    """Tags every record with the validator or checker being run"""

    def __init__(self, logger: logging.Logger, program: str):
        super().__init__(logger, {"program": program})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    use_colors: bool = True,
) -> None:
    """
    Configure logging for kuroe.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for log output
        use_colors: Enable colored console output
    """
    kuroe_logger = logging.getLogger("kuroe")
    kuroe_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    kuroe_logger.handlers.clear()

    # stdout may be the report channel
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(KuroeFormatter(use_colors=use_colors))
    kuroe_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(KuroeFormatter(use_colors=False))
        kuroe_logger.addHandler(file_handler)

    kuroe_logger.debug("Logging configured")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance"""
    return logging.getLogger(f"kuroe.{name}")
