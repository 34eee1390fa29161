"""
Dependency downloader implementation.

Materializes resolved libraries under the install's libraries directory.
"""

import logging
import pathlib
import shutil
from typing import List, Optional

import httpx

from launchjar.launchjar_exceptions import LocalArchiveReadError, NetworkFetchError
from launchjar.launchjar_logger import LaunchjarLogger
from launchjar.launchjar_utils import FileUtils
from launchjar.progress import InstallerProgress, NullProgress, progress_message
from launchjar.runtime_dependency_models import DependencySpec, ResolvedLibrary


class DependencyDownloader:
    """
    Downloads or copies libraries into the libraries directory.

    Libraries are materialized one at a time, in the given order, at their
    Maven-style relative path (`libraries/net/fabricmc/.../x.jar`).
    """

    def __init__(
        self,
        libraries_dir: pathlib.Path,
        logger: LaunchjarLogger,
        http_client: Optional[httpx.Client] = None,
        progress: Optional[InstallerProgress] = None,
    ):
        """
        Initialize the dependency downloader.

        Args:
            libraries_dir: Directory the libraries are stored under
            logger: Logger for progress and error messages
            http_client: Client used for remote libraries
            progress: Sink for human-readable progress messages
        """
        self.libraries_dir = pathlib.Path(libraries_dir)
        self.logger = logger
        self.http_client = http_client
        self.progress = progress or NullProgress()

    def download_all(self, libraries: List[DependencySpec]) -> List[ResolvedLibrary]:
        """
        Materialize every library in order. The first failure aborts the whole run.
        """
        self.logger.log(
            f"Materializing {len(libraries)} libraries into {self.libraries_dir}",
            logging.INFO,
        )
        return [self.download_dependency(spec) for spec in libraries]

    def download_dependency(self, spec: DependencySpec) -> ResolvedLibrary:
        """
        Download or copy a single library.

        Raises:
            NetworkFetchError: If a remote library cannot be downloaded
            LocalArchiveReadError: If a local library cannot be copied
        """
        target = self.libraries_dir / spec.relative_path

        if spec.is_local:
            self.progress.update_progress(progress_message("copy.library.entry", spec.coordinate))
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(spec.local_path, target)
            except OSError as e:
                raise LocalArchiveReadError(spec.local_path, f"cannot copy to {target}: {e}") from e
            self.logger.log(f"Copied {spec.coordinate} from {spec.local_path}", logging.DEBUG)
        else:
            if self.http_client is None:
                raise ValueError("DependencyDownloader needs an http_client to download libraries")
            self.progress.update_progress(progress_message("download.library.entry", spec.coordinate))
            url = spec.url()
            FileUtils.download_file(self.logger, self.http_client, url, target)
            self._verify_download(url, target)

        return ResolvedLibrary(spec=spec, local_file=target)

    def _verify_download(self, url: str, target: pathlib.Path) -> None:
        """
        Verify that a download produced a non-empty file.
        """
        if not target.exists():
            self.logger.log(f"Destination path does not exist: {target}", logging.WARNING)
            raise NetworkFetchError(url, f"nothing was written to {target}")

        if target.stat().st_size == 0:
            self.logger.log(f"Downloaded file is empty: {target}", logging.WARNING)
            raise NetworkFetchError(url, "downloaded file is empty")
