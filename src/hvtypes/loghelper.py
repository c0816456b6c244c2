"""Logging helpers for the hvtypes logger hierarchy.

All loggers of this library are children of the 'hvtypes' logger, e.g. 'hvtypes.things'.
The library itself only logs on debug level.
"""
import logging
from logging import handlers as logging_handlers

ROOT_LOGGER_NAME = 'hvtypes'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _hierarchy(root_logger_name):
    sub_logger_name = root_logger_name + '.'
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith(sub_logger_name) or name == root_logger_name:
            yield logging.getLogger(name)


def ensure_log_stream(root_logger_name=ROOT_LOGGER_NAME):
    """Make sure that the root logger of the library has a stream handler with the default format."""
    applog = logging.getLogger(root_logger_name)
    for handler in applog.handlers:
        if isinstance(handler, logging.StreamHandler):
            return
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    applog.addHandler(stream_handler)


def reset_log_levels(root_logger_name=ROOT_LOGGER_NAME):
    for logger in _hierarchy(root_logger_name):
        logger.setLevel(logging.NOTSET)


def reset_handlers(root_logger_name=ROOT_LOGGER_NAME):
    for logger in _hierarchy(root_logger_name):
        for handler in list(logger.handlers):
            logger.removeHandler(handler)


def basic_logging_setup(root_logger_name=ROOT_LOGGER_NAME, level=logging.INFO, log_file_name=None):
    """Reset the logger hierarchy and log to stderr and optionally to a rotating file.

    :return: the root logger
    """
    reset_log_levels(root_logger_name)
    reset_handlers(root_logger_name)
    logger = logging.getLogger(root_logger_name)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if log_file_name:
        file_handler = logging_handlers.RotatingFileHandler(log_file_name,
                                                            maxBytes=5000000,
                                                            backupCount=2)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    return logger


class LoggerAdapter:
    """
    This adapter wraps a standard logger and changes the interface in two ways:
     - it uses .format() method of strings for formatting (in contrast to logging.Logger, which uses % operator).
     - if any argument in *args or **kwargs is callable, it is replaced with the returned value of the call.
       The call only happens if the logger is enabled for the given log level.
    """

    def __init__(self, logger, prefix=None):
        self.logger = logger
        self.log_prefix = prefix or ''

    def _process(self, msg, args, kwargs):
        _msg = self.log_prefix + msg
        if len(args) == len(kwargs) == 0:
            return _msg
        resolved_args = [arg() if callable(arg) else arg for arg in args]
        resolved_kwargs = {key: arg() if callable(arg) else arg for key, arg in kwargs.items()}
        return _msg.format(*resolved_args, **resolved_kwargs)

    def debug(self, msg, *args, **kwargs):
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        self.log(logging.ERROR, msg, *args, **kwargs)

    def log(self, level, msg, *args, **kwargs):
        """Delegate a log call to the underlying logger, after processing msg, args and kwargs."""
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self._process(msg, args, kwargs))


def get_logger_adapter(name, prefix=None) -> LoggerAdapter:
    """Use this method instead of logging.getLogger.

    :return: a LoggerAdapter instance
    """
    return LoggerAdapter(logging.getLogger(name), prefix)


class LogWatchError(Exception):
    def __init__(self, issues):
        super().__init__(issues)
        self.issues = issues

    def __repr__(self):
        return f'LogWatchError: {self.issues}'


class _LogIssue:
    def __init__(self, record):
        self.record = record

    def __repr__(self):
        return f'log msg="{self.record.getMessage()}" level={self.record.levelname} logger={self.record.name}'


class LogWatcherHandler(logging.Handler):
    """A logging handler that stores all records in a list."""

    def __init__(self, logger, level):
        """
        :param logger: the logger that shall be handled
        :param level: all records with log level >= level will be recorded
        """
        super().__init__(level=level)
        self._logger = logger
        self.records = []
        self._logger.addHandler(self)

    def emit(self, record):
        self.acquire()
        try:
            self.records.append(_LogIssue(record))
        finally:
            self.release()

    def disconnect(self):
        self._logger.removeHandler(self)


class LogWatcher:
    """Records log messages of a logger. Used in tests to make sure that no unexpected messages are logged.

    Can be used as context manager, on exit check() is called.
    """

    def __init__(self, logger, level=logging.ERROR):
        self._handler = LogWatcherHandler(logger, level)
        self._previous_level = logger.level
        self._logger = logger
        if logger.getEffectiveLevel() > level:
            logger.setLevel(level)

    def records(self):
        self._handler.acquire()
        try:
            return list(self._handler.records)
        finally:
            self._handler.release()

    def stop(self):
        self._handler.disconnect()
        self._logger.setLevel(self._previous_level)

    def check(self, stop=True):
        """Raise a LogWatchError if any record was found.

        :param stop: if True, the handler is removed from the logger
        """
        all_records = self.records()
        if stop:
            self.stop()
        if all_records:
            raise LogWatchError(all_records)

    def __enter__(self):
        return self

    def __exit__(self, et, ev, tb):
        if et is None:
            self.check()
        else:
            self.stop()
