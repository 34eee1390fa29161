"""
This module contains the exceptions raised by the launchjar framework.
"""


class LaunchjarException(Exception):
    """
    Exceptions raised by the launchjar framework.
    """

    def __init__(self, message: str):
        """
        Initializes the exception with the given message.
        """
        super().__init__(message)


class IncompatibleCombinationError(LaunchjarException):
    """
    Raised before any I/O when a loader version is known not to work with a game version.
    """


class InvalidCoordinateError(LaunchjarException):
    """
    Raised when a dependency coordinate cannot be split into group, artifact and version.
    """


class DescriptorError(LaunchjarException):
    """
    Raised when a loader descriptor document is not valid JSON or misses required fields.
    """


class NetworkFetchError(LaunchjarException):
    """
    Raised when a remote file cannot be fetched. Carries the offending URL.
    """

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to fetch {url}: {message}")


class LocalArchiveReadError(LaunchjarException):
    """
    Raised when a local archive cannot be read, or misses an entry the installer needs.
    """

    def __init__(self, path: str, message: str):
        self.path = str(path)
        super().__init__(f"Failed to read archive {path}: {message}")


class ArchiveWriteError(LaunchjarException):
    """
    Raised when the output archive cannot be written. The partially written file is left in place.
    """

    def __init__(self, path: str, message: str):
        self.path = str(path)
        super().__init__(f"Failed to write archive {path}: {message}")
