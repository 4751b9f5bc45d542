# Logging setup for the relay: coloured console output plus optional file logging.
import logging
from typing import Optional


class CustomFormatter(logging.Formatter):
    """
    A custom formatter for logging messages with different log levels.

    Attributes:
        grey (str): ANSI escape sequence for grey color.
        yellow (str): ANSI escape sequence for yellow color.
        red (str): ANSI escape sequence for red color.
        bold_red (str): ANSI escape sequence for bold red color.
        reset (str): ANSI escape sequence to reset color.
        FORMATS (dict): A dictionary mapping log levels to their respective log message formats.

    Usage:
        handler = logging.StreamHandler()
        handler.setFormatter(CustomFormatter())
    """
    grey = "\x1b[37;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    dark_grey = "\x1b[30;1m"
    reset = "\x1b[0m"
    log_format = '[%(levelname)s] %(asctime)s - %(name)s - %(message)s'

    FORMATS = {
        logging.DEBUG: dark_grey + log_format + reset,
        logging.INFO: grey + log_format + reset,
        logging.WARNING: yellow + log_format + reset,
        logging.ERROR: red + log_format + reset,
        logging.CRITICAL: bold_red + log_format + reset
    }

    def format(self, record):
        """
        Formats the log record based on its log level.

        Args:
            record (logging.LogRecord): The log record to be formatted.

        Returns:
            str: The formatted log message.
        """
        log_fmt = self.FORMATS.get(record.levelno, self.log_format)
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


ROOT_LOGGER_NAME = "relay"
FILE_LOG_FORMAT = '[%(levelname)s] %(asctime)s - %(name)s - %(message)s'


def _root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        # console handler shared by every module logger
        ch = logging.StreamHandler()
        ch.setLevel(logging.DEBUG)
        ch.setFormatter(CustomFormatter())
        root.addHandler(ch)
        root.setLevel(logging.INFO)
    return root


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger nested under the application's root logger.

    Args:
        name: Usually the caller's ``__name__``.

    Returns:
        logging.Logger: A child logger that inherits the console handler.
    """
    root = _root_logger()
    if name == ROOT_LOGGER_NAME:
        return root
    return root.getChild(name)


def setup_file_logging(log_file: Optional[str], level: int = logging.INFO) -> logging.Logger:
    """
    Set the application log level and, when a path is given, mirror output to a file.

    Args:
        log_file: Path of the log file, or None for console only.
        level: Logging level for the application loggers.

    Returns:
        logging.Logger: The configured root application logger.
    """
    root = _root_logger()
    root.setLevel(level)

    if log_file:
        already_attached = any(
            isinstance(h, logging.FileHandler) and h.baseFilename.endswith(log_file)
            for h in root.handlers
        )
        if not already_attached:
            fh = logging.FileHandler(log_file, encoding="utf-8")
            fh.setLevel(level)
            fh.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
            root.addHandler(fh)

    return root
