import json
import logging
from datetime import datetime
from typing import Any, Dict, List


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs log records as JSON objects."""

    def format(self, record):
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add any extra attributes that were passed via extra={}
        # This excludes standard logging attributes
        standard_attrs = {
            "name",
            "msg",
            "args",
            "levelname",
            "levelno",
            "pathname",
            "filename",
            "module",
            "lineno",
            "funcName",
            "created",
            "msecs",
            "relativeCreated",
            "thread",
            "threadName",
            "processName",
            "process",
            "taskName",
            "message",
            "exc_info",
            "exc_text",
            "stack_info",
            "getMessage",
        }

        for attr_name, attr_value in record.__dict__.items():
            if attr_name not in standard_attrs and not attr_name.startswith("_"):
                log_data[attr_name] = attr_value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Formatter for console output that stays out of the way of game text."""

    def format(self, record):
        message = record.getMessage()

        # Console shows no debug output; the JSON log has it
        if record.levelname == "DEBUG":
            return None

        # Always show errors and warnings, regardless of event type
        if record.levelname in ["ERROR", "WARNING", "CRITICAL"]:
            return f"{record.levelname}: {message}"

        if hasattr(record, "event_type"):
            event_type = record.event_type

            if event_type == "session_started":
                screen_id = getattr(record, "screen_id", "unknown")
                return f"[session started on screen {screen_id}]"

            elif event_type == "outcome_applied":
                command = getattr(record, "command", "")
                outcome = getattr(record, "outcome", "unknown")
                return f"[{command!r} -> {outcome}]"

            elif event_type in ["command_submitted", "response_classified"]:
                return None

        return message


class FilteringStreamHandler(logging.StreamHandler):
    """Stream handler that filters out None messages from formatter."""

    def emit(self, record):
        try:
            msg = self.format(record)
            if msg is not None:  # Only emit if formatter didn't return None
                stream = self.stream
                stream.write(msg + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


class FilteringFileHandler(logging.FileHandler):
    """File handler that filters out None messages from formatter."""

    def emit(self, record):
        try:
            msg = self.format(record)
            if msg is not None:  # Only emit if formatter didn't return None
                if self.stream is None:
                    self.stream = self._open()
                stream = self.stream
                stream.write(msg + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(log_file: str, json_log_file: str, log_level: int = logging.WARNING):
    """
    Set up logging with console and file handlers.

    The console handler only ever shows warnings and errors so that log
    output does not interleave with the game text; both files record
    everything at log_level and above.

    Args:
        log_file: Path to the human-readable log file
        json_log_file: Path to the JSON log file
        log_level: Logging level (default: WARNING)
    """
    logger = logging.getLogger()
    logger.setLevel(log_level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = FilteringStreamHandler()
    console_handler.setLevel(max(log_level, logging.WARNING))
    console_handler.setFormatter(HumanReadableFormatter())
    logger.addHandler(console_handler)

    file_handler = FilteringFileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(log_level)
    file_handler.setFormatter(HumanReadableFormatter())
    logger.addHandler(file_handler)

    json_handler = logging.FileHandler(json_log_file, mode="a", encoding="utf-8")
    json_handler.setLevel(log_level)
    json_handler.setFormatter(JSONFormatter())
    json_handler.is_json_handler = True  # Mark for identification
    logger.addHandler(json_handler)

    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(max(log_level, logging.INFO))

    return logger


def parse_json_logs(json_log_file: str) -> List[Dict[str, Any]]:
    """Parse a JSON log file into a list of log entries."""
    logs = []
    with open(json_log_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                logs.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                continue
    return logs
