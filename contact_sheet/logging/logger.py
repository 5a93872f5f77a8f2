"""Unified logging system for the contact-sheet application."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


class ContactSheetLogger:
    """Centralized logger for planning and rendering operations."""

    def __init__(
        self,
        name: str = "contact_sheet",
        level: str = "INFO",
        log_dir: Optional[Union[str, Path]] = None,
    ):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.log_dir = Path(log_dir) if log_dir else None

        # Prevent duplicate handlers
        if not self.logger.handlers:
            self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Setup console and optional file handlers."""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )
        console_handler.setFormatter(console_formatter)
        self.logger.addHandler(console_handler)

        if self.log_dir is not None:
            self.add_file_handler(self.log_dir)

    def add_file_handler(self, log_dir: Union[str, Path]) -> Path:
        """Write DEBUG and above to a timestamped file in ``log_dir``."""
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = log_dir / f"contact_sheet_{timestamp}.log"
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        )
        file_handler.setFormatter(file_formatter)
        self.logger.addHandler(file_handler)
        self.log_dir = log_dir
        return log_path

    def set_level(self, level: str) -> None:
        self.logger.setLevel(getattr(logging, level.upper()))

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        self.logger.info(message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        self.logger.debug(message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        self.logger.error(message, **kwargs)

    def log_operation_start(self, operation: str, **details) -> None:
        """Log the start of an operation."""
        details_str = ", ".join(f"{k}={v}" for k, v in details.items())
        self.info(f"🚀 Starting {operation}" + (f" ({details_str})" if details_str else ""))

    def log_operation_complete(self, operation: str, duration: Optional[float] = None, **results) -> None:
        """Log the completion of an operation."""
        duration_str = f" in {duration:.2f}s" if duration else ""
        results_str = ", ".join(f"{k}={v}" for k, v in results.items())
        self.info(f"✅ Completed {operation}{duration_str}" + (f" ({results_str})" if results_str else ""))

    def log_operation_error(self, operation: str, error: Exception) -> None:
        """Log an operation error."""
        self.error(f"❌ Failed {operation}: {str(error)}")

    def log_progress(self, current: int, total: int, operation: str = "") -> None:
        """Log progress for long operations."""
        percentage = (current / total) * 100 if total > 0 else 0
        op_str = f" {operation}" if operation else ""
        self.info(f"📊 Progress{op_str}: {current}/{total} ({percentage:.1f}%)")


# Global logger instance
_logger_instance: Optional[ContactSheetLogger] = None


def get_logger(name: str = "contact_sheet", level: str = "INFO") -> ContactSheetLogger:
    """Get or create the global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = ContactSheetLogger(name, level)
    return _logger_instance


def setup_logging(level: str = "INFO", log_dir: Optional[Union[str, Path]] = None) -> ContactSheetLogger:
    """Setup logging for the application."""
    logger = get_logger(level=level)
    logger.set_level(level)
    if log_dir is not None and logger.log_dir is None:
        logger.add_file_handler(log_dir)
    return logger
