"""
Installs a loader server: resolves its libraries, materializes them under the install
directory, and generates the server launch jar.
"""

import dataclasses
import logging
import pathlib
from typing import List, Optional, Union

import httpx

from launchjar.archive_assembler import LaunchJarAssembler
from launchjar.launchjar_config import InstallerConfig
from launchjar.launchjar_exceptions import LaunchjarException
from launchjar.launchjar_logger import LaunchjarLogger
from launchjar.launchjar_utils import ArchiveUtils
from launchjar.progress import InstallerProgress, LoggingProgress, progress_message
from launchjar.runtime_dependency_config import DependencyResolver, ResolutionResult
from launchjar.runtime_dependency_downloader import DependencyDownloader
from launchjar.runtime_dependency_models import LoaderVersion, PackagingPlan, ResolvedLibrary


class ServerInstaller:
    """
    Orchestrates the resolver, the downloader and the launch jar assembler.

    Example usage:
    ```python
    config = InstallerConfig.load()
    logger = LaunchjarLogger()
    installer = ServerInstaller(config, logger)
    installer.install("server", LoaderVersion.from_name("0.12.5"), "1.8.9")
    ```
    """

    def __init__(
        self,
        config: InstallerConfig,
        logger: LaunchjarLogger,
        progress: Optional[InstallerProgress] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            config: Installer configuration
            logger: Logger for progress and error messages
            progress: Sink for human-readable progress messages, the logger by default
            http_client: Client for descriptor and library downloads. A client is created
                per install when omitted.
        """
        self.config = config
        self.logger = logger
        self.progress = progress or LoggingProgress(logger)
        self.http_client = http_client

    def install(
        self,
        install_dir: Union[str, pathlib.Path],
        loader_version: LoaderVersion,
        game_version: str,
        launch_jar: Optional[Union[str, pathlib.Path]] = None,
    ) -> pathlib.Path:
        """
        Install the server into `install_dir` and return the path of the launch jar.

        Raises:
            LaunchjarException: If the install fails. A partially written launch jar is left in place.
        """
        install_dir = pathlib.Path(install_dir)
        launch_jar = pathlib.Path(launch_jar) if launch_jar else install_dir / self.config.launch_jar_name

        client = self.http_client or httpx.Client(
            timeout=self.config.request_timeout, follow_redirects=True
        )
        try:
            resolver = DependencyResolver(self.config, self.logger, http_client=client)
            resolver.check_compatibility(loader_version, game_version)

            self.progress.update_progress(
                progress_message("installing.server", f"{loader_version.name}({game_version})")
            )

            libraries_dir = install_dir / self.config.libraries_dir_name
            try:
                libraries_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise LaunchjarException(f"Cannot create install directory {install_dir}: {e}") from e

            self.progress.update_progress(progress_message("download.libraries"))

            resolution = resolver.resolve(loader_version, game_version)
            downloader = DependencyDownloader(
                libraries_dir, self.logger, http_client=client, progress=self.progress
            )
            libraries = downloader.download_all(resolution.libraries)
        finally:
            if self.http_client is None:
                client.close()

        plan = self._apply_loader_manifest(loader_version, resolution, libraries)

        self.progress.update_progress(progress_message("generating.launch.jar"))

        assembler = LaunchJarAssembler(self.config, self.logger, progress=self.progress)
        assembler.assemble(
            launch_jar,
            plan.launch_main_class,
            plan.manifest_main_class,
            [library.local_file for library in libraries],
            plan.strategy,
        )

        return launch_jar

    def _apply_loader_manifest(
        self,
        loader_version: LoaderVersion,
        resolution: ResolutionResult,
        libraries: List[ResolvedLibrary],
    ) -> PackagingPlan:
        """
        Use the Main-Class declared by the loader jar itself as the launcher, when it declares one.
        Only standard loader artifacts are inspected, the legacy loader artifact keeps the default launcher.
        """
        if loader_version.is_legacy and loader_version.path is None:
            self.logger.log(
                f"Keeping launcher {resolution.plan.manifest_main_class} for legacy loader {loader_version.name}",
                logging.DEBUG,
            )
            return resolution.plan

        loader = next(
            library for library in libraries if library.spec == resolution.loader_library
        )
        main_class = ArchiveUtils.read_main_class(loader.local_file)

        if not main_class:
            self.logger.log(
                f"Loader jar {loader.local_file} declares no Main-Class, "
                f"using {resolution.plan.manifest_main_class}",
                logging.WARNING,
            )
            return resolution.plan

        return dataclasses.replace(resolution.plan, manifest_main_class=main_class)
