"""Logging configuration utilities."""

import json
import logging
import os
from datetime import datetime
from pathlib import Path

from icsgen.config.types import AppConfig


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, include_timestamp: bool = True):
        """Initialize formatter.
        
        Args:
            include_timestamp: Whether to include timestamp in output
        """
        self.include_timestamp = include_timestamp
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        data = {
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if self.include_timestamp:
            data['timestamp'] = datetime.fromtimestamp(record.created).isoformat()

        if record.exc_info:
            data['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            data.update(record.extra_fields)

        return json.dumps(data, default=str)

class ColoredFormatter(logging.Formatter):
    """Formatter that adds color to console output."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with color."""
        color = self.COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S,%f')[:-3]
        msg = record.getMessage()
        
        fields = getattr(record, 'extra_fields', None)
        if fields:
            msg = f"{msg} [" + " ".join(f"{k}={v}" for k, v in fields.items()) + "]"
        
        if record.exc_info:
            msg = f"{msg}\n{self.formatException(record.exc_info)}"
        
        return f"{color}{timestamp} - {record.name} - {record.levelname} - {msg}{self.RESET}"

def get_file_handler(log_file: str | Path, formatter: logging.Formatter) -> logging.FileHandler:
    """Create file handler, creating the log directory if needed."""
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(formatter)
    return file_handler

def setup_logging(
    config: AppConfig | None = None,
    verbose: bool = False,
    log_file: str | None = None,
    json_format: bool = False
) -> None:
    """Set up logging configuration for applications embedding the generator."""
    if verbose:
        level = logging.DEBUG
    elif config is not None:
        level = getattr(logging, config.log_level.upper(), logging.WARNING)
    else:
        level = logging.INFO
    
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(JsonFormatter() if json_format else ColoredFormatter())
    root_logger.addHandler(console_handler)
    
    log_file = log_file or (config.log_file if config is not None else None)
    if log_file:
        file_handler = get_file_handler(
            log_file,
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)
