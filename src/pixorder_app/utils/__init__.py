# Utility modules
# - run_log: run event logging (logger, plain-text file, UI listener)

from pixorder_app.utils.run_log import DEFAULT_LOG_DIR, LogLevel, RunLogger

__all__ = [
    "RunLogger",
    "LogLevel",
    "DEFAULT_LOG_DIR",
]
