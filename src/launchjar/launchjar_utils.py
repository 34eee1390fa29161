"""
This file contains various utility functions like I/O operations, handling paths, etc.
"""

import logging
import pathlib
import re
import zipfile
from typing import Optional, Tuple, Union

import httpx

from launchjar.archive_assembler.manifest import MANIFEST_PATH, JarManifest
from launchjar.launchjar_exceptions import (
    LaunchjarException,
    LocalArchiveReadError,
    NetworkFetchError,
)
from launchjar.launchjar_logger import LaunchjarLogger

DOWNLOAD_CHUNK_SIZE = 65536

PathLike = Union[str, pathlib.Path]


class FileUtils:
    """
    Utility functions for fetching remote files
    """

    @staticmethod
    def read_text(logger: LaunchjarLogger, client: httpx.Client, url: str) -> str:
        """
        Reads the full text content of the given URL

        Raises:
            NetworkFetchError: If the request fails or the server answers with an error status
        """
        logger.log(f"Fetching {url}", logging.DEBUG)
        try:
            response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise NetworkFetchError(url, str(e)) from e
        return response.text

    @staticmethod
    def download_file(
        logger: LaunchjarLogger, client: httpx.Client, url: str, target_path: PathLike
    ) -> int:
        """
        Downloads the file from the given URL to the given target path, returning the number of bytes written

        Raises:
            NetworkFetchError: If the request fails or the server answers with an error status
        """
        target = pathlib.Path(target_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        logger.log(f"Downloading {url} to {target}", logging.DEBUG)

        downloaded = 0
        try:
            with client.stream("GET", url) as response:
                response.raise_for_status()
                with open(target, "wb") as fh:
                    for chunk in response.iter_bytes(DOWNLOAD_CHUNK_SIZE):
                        if not chunk:
                            continue
                        fh.write(chunk)
                        downloaded += len(chunk)
        except httpx.HTTPError as e:
            raise NetworkFetchError(url, str(e)) from e
        except OSError as e:
            raise LaunchjarException(f"Failed to save {url} to {target}: {e}") from e

        logger.log(f"Downloaded {url} ({downloaded} bytes)", logging.DEBUG)
        return downloaded


class ArchiveUtils:
    """
    Introspection of local zip/jar archives
    """

    @staticmethod
    def read_entry(archive_path: PathLike, entry_name: str) -> bytes:
        """
        Reads a single entry of the archive.

        Raises:
            LocalArchiveReadError: If the archive cannot be opened or lacks the entry
        """
        try:
            with zipfile.ZipFile(archive_path) as zf:
                try:
                    return zf.read(entry_name)
                except KeyError as e:
                    raise LocalArchiveReadError(
                        archive_path, f"missing entry {entry_name}"
                    ) from e
        except (OSError, zipfile.BadZipFile) as e:
            raise LocalArchiveReadError(archive_path, str(e)) from e

    @staticmethod
    def read_entry_text(archive_path: PathLike, entry_name: str) -> str:
        data = ArchiveUtils.read_entry(archive_path, entry_name)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise LocalArchiveReadError(
                archive_path, f"entry {entry_name} is not UTF-8 text"
            ) from e

    @staticmethod
    def read_main_class(archive_path: PathLike) -> Optional[str]:
        """
        Returns the Main-Class declared by the archive's manifest, or None if it declares none.

        Raises:
            LocalArchiveReadError: If the archive has no readable manifest
        """
        data = ArchiveUtils.read_entry(archive_path, MANIFEST_PATH)
        try:
            manifest = JarManifest.parse(data)
        except ValueError as e:
            raise LocalArchiveReadError(archive_path, f"malformed manifest: {e}") from e
        return manifest.get(JarManifest.MAIN_CLASS)


_COMPONENT_PATTERN = re.compile(r"(\d*)(.*)")


class VersionUtils:
    """
    Version string comparison
    """

    @staticmethod
    def compare_versions(left: str, right: str) -> int:
        """
        Compares two dotted version strings component by component, numerically.

        Build metadata after `+` is ignored and missing components count as 0, so
        "0.12.10" > "0.12.5" and "1.8" == "1.8.0". Within a component a bare number
        sorts after the same number with a suffix ("0-beta" < "0").

        Returns:
            A negative number, zero or a positive number as left is older, equal or newer
        """
        left_parts = left.split("+", 1)[0].split(".")
        right_parts = right.split("+", 1)[0].split(".")

        for i in range(max(len(left_parts), len(right_parts))):
            left_number, left_suffix = VersionUtils._split_component(left_parts, i)
            right_number, right_suffix = VersionUtils._split_component(right_parts, i)

            if left_number != right_number:
                return -1 if left_number < right_number else 1

            if left_suffix != right_suffix:
                if not left_suffix:
                    return 1
                if not right_suffix:
                    return -1
                return -1 if left_suffix < right_suffix else 1

        return 0

    @staticmethod
    def _split_component(parts, index: int) -> Tuple[int, str]:
        if index >= len(parts):
            return 0, ""
        number, suffix = _COMPONENT_PATTERN.match(parts[index]).groups()
        return int(number) if number else 0, suffix
