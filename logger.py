"""
Logging System for OctetField.
Provides structured logging with rotating files, a dedicated validation
log and a mixin for widget and model classes.
"""
import logging
import logging.handlers
import os
import time
import json
import traceback
from pathlib import Path
from typing import Optional, Dict, Any, Union
from enum import Enum, auto
from datetime import datetime
import uuid
LOG_DIR_ENV = "OCTETFIELD_LOG_DIR"
class LogLevel(Enum):
    """Log levels including a trace level below DEBUG."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
logging.addLevelName(LogLevel.TRACE.value, LogLevel.TRACE.name)
class LogCategory(Enum):
    """Categories for address-input logging."""
    SYSTEM = auto()
    INPUT = auto()
    CLIPBOARD = auto()
    VALIDATION = auto()
    FORM = auto()
    CONFIG = auto()
    USER_ACTION = auto()
class StructuredFormatter(logging.Formatter):
    """Custom formatter that supports structured logging with JSON output."""
    def __init__(self, include_json=True):
        super().__init__()
        self.include_json = include_json
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        level = record.levelname
        logger_name = record.name
        message = record.getMessage()
        basic_line = f"[{timestamp}] {level:8} {logger_name}: {message}"
        structured_data = {}
        # Extract custom fields
        for key, value in record.__dict__.items():
            if key.startswith('field_') or key in ['category', 'session_id']:
                structured_data[key] = value
        if record.exc_info:
            structured_data['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info)
            }
        structured_data['location'] = {
            'filename': record.filename,
            'line': record.lineno,
            'function': record.funcName
        }
        if structured_data and self.include_json:
            json_data = json.dumps(structured_data, default=str, ensure_ascii=False)
            return f"{basic_line} | {json_data}"
        return basic_line
def default_log_dir() -> Path:
    """Return the log directory, honouring the ``OCTETFIELD_LOG_DIR`` override."""
    override = os.environ.get(LOG_DIR_ENV)
    if override:
        return Path(override)
    return Path.home() / "OctetField" / "logs"
class OctetFieldLogger:
    """Structured logger for the OctetField widgets and core."""
    def __init__(self, name: str = "octetfield", log_dir: Optional[Path] = None):
        self.name = name
        self.session_id = str(uuid.uuid4())[:8]
        if log_dir is None:
            log_dir = default_log_dir()
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._setup_loggers()
        self.info("OctetField logging system initialized",
                  session_id=self.session_id,
                  log_dir=str(self.log_dir))
    def _setup_loggers(self):
        """Setup main logger and handlers."""
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(logging.DEBUG)
        # Drop handlers left by a previous setup_logger() call
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(StructuredFormatter(include_json=False))
        self.logger.addHandler(console_handler)
        log_file = self.log_dir / f"{self.name}.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10*1024*1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setLevel(LogLevel.TRACE.value)
        file_handler.setFormatter(StructuredFormatter(include_json=True))
        self.logger.addHandler(file_handler)
        # Validation events get their own file so rejected values can be audited
        validation_log_file = self.log_dir / f"{self.name}_validation.log"
        self.validation_handler = logging.handlers.RotatingFileHandler(
            validation_log_file, maxBytes=5*1024*1024, backupCount=3, encoding="utf-8"
        )
        self.validation_handler.setLevel(logging.INFO)
        self.validation_handler.setFormatter(StructuredFormatter(include_json=True))
        error_log_file = self.log_dir / f"{self.name}_errors.log"
        error_handler = logging.handlers.RotatingFileHandler(
            error_log_file, maxBytes=5*1024*1024, backupCount=5, encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(StructuredFormatter(include_json=True))
        self.logger.addHandler(error_handler)
    def _extra(self, category: Optional[Union[LogCategory, str]], **kwargs) -> Dict[str, Any]:
        if isinstance(category, LogCategory):
            category_name = category.name
        elif category:
            category_name = str(category).upper()
        else:
            category_name = 'GENERAL'
        extra = {
            'session_id': self.session_id,
            'category': category_name
        }
        for key, value in kwargs.items():
            if not key.startswith('_'):
                extra[f'field_{key}'] = value
        return extra
    def _log(self, level: int, message: str, category: Optional[Union[LogCategory, str]] = None,
             exception: Optional[Exception] = None, **kwargs):
        """Internal logging method attaching session and category context."""
        extra = self._extra(category, **kwargs)
        if exception:
            self.logger.log(level, message, exc_info=(type(exception), exception, exception.__traceback__), extra=extra)
        else:
            self.logger.log(level, message, extra=extra)
    def trace(self, message: str, category: Optional[LogCategory] = None, **kwargs):
        """Log trace message (per-keystroke detail)."""
        self._log(LogLevel.TRACE.value, message, category, **kwargs)
    def debug(self, message: str, category: Optional[LogCategory] = None, **kwargs):
        """Log debug message."""
        self._log(LogLevel.DEBUG.value, message, category, **kwargs)
    def info(self, message: str, category: Optional[LogCategory] = None, **kwargs):
        """Log info message."""
        self._log(LogLevel.INFO.value, message, category, **kwargs)
    def warning(self, message: str, category: Optional[LogCategory] = None, **kwargs):
        """Log warning message."""
        self._log(LogLevel.WARNING.value, message, category, **kwargs)
    def error(self, message: str, exception: Optional[Exception] = None,
              category: Optional[LogCategory] = None, **kwargs):
        """Log error message."""
        self._log(LogLevel.ERROR.value, message, category, exception, **kwargs)
    def critical(self, message: str, exception: Optional[Exception] = None,
                 category: Optional[LogCategory] = None, **kwargs):
        """Log critical message."""
        self._log(LogLevel.CRITICAL.value, message, category, exception, **kwargs)
    def validation_event(self, message: str, level: int = logging.WARNING, **kwargs):
        """Log a rejected value to the main log and the validation log."""
        self._log(level, f"VALIDATION: {message}", LogCategory.VALIDATION, **kwargs)
        extra = self._extra(LogCategory.VALIDATION, **kwargs)
        self.validation_handler.handle(
            self.logger.makeRecord(self.name, level, __file__, 0,
                                   f"VALIDATION: {message}", (), None, extra=extra)
        )
    def log_user_action(self, action: str, details: Optional[Dict[str, Any]] = None):
        """Log user actions for debugging."""
        log_data = {
            'action': action,
            'timestamp': time.time()
        }
        if details:
            log_data.update(details)
        self._log(LogLevel.INFO.value, f"USER ACTION: {action}",
                  LogCategory.USER_ACTION, **log_data)
    def log_input_event(self, event_type: str, slot: Optional[int] = None, **kwargs):
        """Log a raw input event routed to an octet slot."""
        input_data = {'event_type': event_type}
        if slot is not None:
            input_data['slot'] = slot
        input_data.update(kwargs)
        category = LogCategory.CLIPBOARD if event_type == "paste" else LogCategory.INPUT
        self.trace(f"INPUT: {event_type}", category, **input_data)
    def set_log_level(self, level: Union[str, int, LogLevel]):
        """Set the logging level."""
        if isinstance(level, LogLevel):
            level = level.value
        elif isinstance(level, str):
            level = LogLevel[level.upper()].value
        self.logger.setLevel(level)
        self.info(f"Log level set to: {logging.getLevelName(level)}")
    def cleanup_old_logs(self, days_to_keep: int = 30):
        """Clean up log files older than specified days."""
        try:
            cutoff_time = time.time() - (days_to_keep * 24 * 3600)
            removed_count = 0
            for log_file in self.log_dir.glob("*.log*"):
                if log_file.stat().st_mtime < cutoff_time:
                    log_file.unlink()
                    removed_count += 1
            self.info(f"Cleaned up {removed_count} old log files",
                      category=LogCategory.SYSTEM,
                      removed_count=removed_count,
                      days_to_keep=days_to_keep)
        except OSError as e:
            self.error("Failed to cleanup old logs", exception=e)
# Global logger instance
_global_logger: Optional[OctetFieldLogger] = None
def get_logger() -> OctetFieldLogger:
    """Get the global logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = OctetFieldLogger()
    return _global_logger
def setup_logger(name: str = "octetfield", log_dir: Optional[Path] = None) -> OctetFieldLogger:
    """Set up and return the global logger."""
    global _global_logger
    _global_logger = OctetFieldLogger(name, log_dir)
    return _global_logger
class LoggableMixin:
    """Mixin class to add logging capabilities to other classes."""
    def __init__(self):
        self._module_name = self.__class__.__name__
    @property
    def _logger(self) -> OctetFieldLogger:
        # Resolved per call so setup_logger() after construction still applies
        return get_logger()
    def log_debug(self, message: str, **kwargs):
        """Log debug message."""
        self._logger.debug(f"[{self._module_name}] {message}", **kwargs)
    def log_warning(self, message: str, **kwargs):
        """Log warning message."""
        self._logger.warning(f"[{self._module_name}] {message}", **kwargs)
    def log_error(self, message: str, exception: Optional[Exception] = None, **kwargs):
        """Log error message."""
        self._logger.error(f"[{self._module_name}] {message}", exception=exception, **kwargs)
    def log_validation_event(self, message: str, **kwargs):
        """Log a rejected value."""
        self._logger.validation_event(f"[{self._module_name}] {message}", **kwargs)
    def log_input_event(self, event_type: str, slot: Optional[int] = None, **kwargs):
        """Log a raw input event."""
        self._logger.log_input_event(event_type, slot, module=self._module_name, **kwargs)
    def log_user_action(self, action: str, details: Optional[Dict[str, Any]] = None):
        """Log user action."""
        action_details = {'module': self._module_name}
        if details:
            action_details.update(details)
        self._logger.log_user_action(action, action_details)
