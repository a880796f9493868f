# This module is a wrapper over pythons logging module. All logging in flerr
# should happen through the functions defined in this module.

import logging
import logging.handlers
import inspect

# flerr is mostly used as a library, so stay quiet until init_logging() is
# called by an application (such as the flerr CLI).
logging.getLogger("flerr").addHandler(logging.NullHandler())

def init_logging(stderr=True, logfile=None, syslog=False, syslog_address="/dev/log", level=logging.INFO):
    """Initialize logging for flerr. Flerr can log to any and all of stderr,
    syslog, and a file. If this function is called multiple times then it will
    fully re-initialize the logging. If none of 'stderr', 'logfile', or 'syslog'
    are True, then 'stderr' is set to True.
    """
    if not (stderr or logfile or syslog):
        stderr = True
    formatter = logging.Formatter("flerr - %(asctime)s - %(levelname)s - %(message)s", "%Y-%m-%d %H:%M:%S")
    handlers = []
    if syslog:
        syslog_handler = logging.handlers.SysLogHandler(address=syslog_address)
        syslog_handler.setFormatter(formatter)
        syslog_handler.setLevel(level)
        handlers.append(syslog_handler)
    if stderr:
        stderr_handler = logging.StreamHandler() # defaults to sys.stderr
        stderr_handler.setFormatter(formatter)
        stderr_handler.setLevel(level)
        handlers.append(stderr_handler)
    if logfile:
        logfile_handler = logging.FileHandler(logfile, encoding="utf-8")
        logfile_handler.setFormatter(formatter)
        logfile_handler.setLevel(level)
        handlers.append(logfile_handler)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)

def disable_logging():
    """Disable all logging by removing all handlers from the root logger."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(logging.CRITICAL + 1)

def logger(name=None):
    """Return a logger with the specified name. If name is None then it defaults
    to the name of the callers module. Records sent before init_logging() is
    called are dropped.
    """
    if name is None:
        name = inspect.getmodule(inspect.stack()[1][0]).__name__
    return logging.getLogger(name)
