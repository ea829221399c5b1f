###########EXTERNAL IMPORTS############

import logging
import logging.handlers
from typing import Optional

#######################################

#############LOCAL IMPORTS#############

#######################################


class LoggerManager:
    """
    Static facade over the standard logging module.

    All package loggers live under the ``medianwindow`` namespace, so a single
    call to `init()` configures every module. Modules obtain their logger with
    `get_logger(__name__)` at the point where they log.
    """

    ROOT_LOGGER_NAME = "medianwindow"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
    LOG_FILE_BACKUP_COUNT = 3

    _initialized: bool = False

    def __init__(self):
        raise TypeError("LoggerManager is a static class and cannot be instantiated")

    @staticmethod
    def init(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
        """
        Installs the console handler (and optionally a rotating file handler)
        on the package root logger. Calling it more than once only updates the level.

        Args:
            level (int): Logging level applied to the package root logger.
            log_file (Optional[str]): Path of a rotating log file, or None to log only to the console.
        """

        root = logging.getLogger(LoggerManager.ROOT_LOGGER_NAME)
        root.setLevel(level)

        if LoggerManager._initialized:
            return

        formatter = logging.Formatter(LoggerManager.LOG_FORMAT)

        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

        if log_file is not None:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=LoggerManager.LOG_FILE_MAX_BYTES,
                backupCount=LoggerManager.LOG_FILE_BACKUP_COUNT,
            )
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

        LoggerManager._initialized = True

    @staticmethod
    def get_logger(name: str) -> logging.Logger:
        """
        Returns the logger for the given module name.

        Args:
            name (str): Usually the caller's ``__name__``.

        Returns:
            logging.Logger: The module logger.
        """

        return logging.getLogger(name)

    @staticmethod
    def reset() -> None:
        """
        Removes every handler installed by `init()`.
        """

        root = logging.getLogger(LoggerManager.ROOT_LOGGER_NAME)
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(logging.NOTSET)
        LoggerManager._initialized = False
