"""
Progress reporting for installs. Progress is a side channel: sinks must not raise or block.
"""

import logging
from typing import Protocol

from launchjar.launchjar_logger import LaunchjarLogger

PROGRESS_MESSAGES = {
    "installing.server": "Installing server {0}",
    "download.libraries": "Downloading libraries",
    "download.library.entry": "Downloading library {0}",
    "copy.library.entry": "Copying library {0}",
    "generating.launch.jar": "Generating server launch jar",
    "generating.launch.jar.library": "Adding {0} to the server launch jar",
}


def progress_message(key: str, *args) -> str:
    return PROGRESS_MESSAGES[key].format(*args)


class InstallerProgress(Protocol):
    def update_progress(self, text: str) -> None:
        ...


class NullProgress:
    """
    Discards every progress message
    """

    def update_progress(self, text: str) -> None:
        pass


class LoggingProgress:
    """
    Routes progress messages to the launchjar logger at INFO level
    """

    def __init__(self, logger: LaunchjarLogger):
        self.logger = logger

    def update_progress(self, text: str) -> None:
        self.logger.log(text, logging.INFO)
