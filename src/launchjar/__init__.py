"""
launchjar generates server launch jars: it resolves the loader's libraries, downloads
them, and assembles them into a single jar the Java runtime can launch directly.
"""

from launchjar.launchjar_config import InstallerConfig
from launchjar.launchjar_exceptions import LaunchjarException
from launchjar.launchjar_logger import LaunchjarLogger
from launchjar.server_installer import ServerInstaller

__all__ = ["InstallerConfig", "LaunchjarException", "LaunchjarLogger", "ServerInstaller"]
