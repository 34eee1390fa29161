"""
Logger wrapper used across launchjar. Every record is emitted as a single JSON line.
"""

import inspect
import logging
from datetime import datetime

from pydantic import BaseModel


class LogLine(BaseModel):
    """
    Represents a line in the launchjar log
    """

    time: str
    level: str
    caller_file: str
    caller_name: str
    caller_line: int
    message: str


class LaunchjarLogger:
    """
    Logger class
    """

    def __init__(self, name: str = "launchjar") -> None:
        self.logger = logging.getLogger(name)

    def log(self, debug_message: str, level: int) -> None:
        """
        Log the message at the given level, annotated with the caller's location
        """
        if not self.logger.isEnabledFor(level):
            return

        debug_message = debug_message.replace("\n", " ")

        caller = inspect.currentframe().f_back
        caller_file = caller.f_code.co_filename.replace("\\", "/").split("/")[-1]

        debug_log_line = LogLine(
            time=str(datetime.now()),
            level=logging.getLevelName(level),
            caller_file=caller_file,
            caller_name=caller.f_code.co_name,
            caller_line=caller.f_lineno,
            message=debug_message,
        )
        self.logger.log(level=level, msg=debug_log_line.model_dump_json())
