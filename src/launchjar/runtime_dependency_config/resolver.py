"""
Dependency resolver.

Turns a loader version and a game version into the ordered list of libraries the
server launch jar needs, and decides how the launch jar packages them.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import httpx

from launchjar.launchjar_config import InstallerConfig
from launchjar.launchjar_exceptions import (
    DescriptorError,
    IncompatibleCombinationError,
    LocalArchiveReadError,
)
from launchjar.launchjar_logger import LaunchjarLogger
from launchjar.launchjar_utils import ArchiveUtils, FileUtils, VersionUtils
from launchjar.runtime_dependency_models import (
    DependencySpec,
    LoaderDescriptor,
    LoaderVersion,
    PackagingPlan,
    PackagingStrategy,
)


@dataclass(frozen=True)
class ResolutionResult:
    """
    Libraries in install order, the packaging plan, and the loader's own library
    (always the first entry of `libraries`).
    """

    libraries: List[DependencySpec]
    plan: PackagingPlan
    loader_library: DependencySpec


class DependencyResolver:
    """
    Resolves the libraries of a server install from the loader descriptor.

    The descriptor is fetched from the loader's maven, or read from inside a local
    loader jar when the loader version carries one.
    """

    def __init__(
        self,
        config: InstallerConfig,
        logger: LaunchjarLogger,
        http_client: Optional[httpx.Client] = None,
        fetch_text: Optional[Callable[[str], str]] = None,
    ):
        """
        Args:
            config: Installer configuration with repository URLs and thresholds
            logger: Logger for progress and error messages
            http_client: Client used to fetch the descriptor when no loader jar is supplied
            fetch_text: Overrides how descriptor text is fetched from a URL
        """
        self.config = config
        self.logger = logger
        self.http_client = http_client
        self._fetch_text = fetch_text

    def check_compatibility(self, loader_version: LoaderVersion, game_version: str) -> None:
        """
        Raises:
            IncompatibleCombinationError: For loader and game versions known not to work together
        """
        if game_version == self.config.legacy_incompatible_game_version and loader_version.is_legacy:
            raise IncompatibleCombinationError(
                f"{game_version} server is incompatible with version 0.11.x and older, "
                "please use 0.12 and newer!"
            )

    def resolve(self, loader_version: LoaderVersion, game_version: str) -> ResolutionResult:
        """
        Resolve the libraries and packaging plan for a server install.

        Raises:
            IncompatibleCombinationError: Before any I/O, for a known-bad version pairing
            NetworkFetchError: If the descriptor cannot be fetched
            LocalArchiveReadError: If a supplied loader jar lacks a valid descriptor
            DescriptorError: If a fetched descriptor is malformed
        """
        self.check_compatibility(loader_version, game_version)

        if loader_version.path is None:
            descriptor = self._fetch_descriptor(loader_version)
            libraries = [
                self.loader_spec(loader_version),
                self.intermediary_spec(game_version),
            ]
            libraries.extend(descriptor.common_specs(self.config.fabric_maven_url))

            old_guava = self.is_old_guava(game_version)
            if not old_guava:
                libraries.extend(descriptor.server_specs(self.config.fabric_maven_url))
            else:
                libraries.extend(self._old_guava_specs(loader_version))
        else:
            descriptor = self._read_embedded_descriptor(loader_version)
            libraries = [
                self.loader_spec(loader_version),
                self.intermediary_spec(game_version),
            ]
            libraries.extend(descriptor.common_specs(self.config.fabric_maven_url))
            libraries.extend(descriptor.server_specs(self.config.fabric_maven_url))

        plan = PackagingPlan(
            launch_main_class=descriptor.server_main_class,
            manifest_main_class=self.config.default_launcher_main_class,
            strategy=self.select_strategy(loader_version),
        )

        self.logger.log(
            f"Resolved {len(libraries)} libraries for loader {loader_version.name} "
            f"({loader_version.family.value}) on {game_version}, strategy {plan.strategy.value}",
            logging.INFO,
        )

        return ResolutionResult(libraries=libraries, plan=plan, loader_library=libraries[0])

    def select_strategy(self, loader_version: LoaderVersion) -> PackagingStrategy:
        """
        Loaders up to the embed threshold launch from a single jar and need their libraries
        embedded; newer loaders read the manifest Class-Path.
        """
        if VersionUtils.compare_versions(loader_version.name, self.config.embed_max_loader_version) <= 0:
            return PackagingStrategy.EMBED
        return PackagingStrategy.CLASSPATH

    def is_old_guava(self, game_version: str) -> bool:
        return VersionUtils.compare_versions(self.config.server_libraries_max_game_version, game_version) < 0

    def loader_spec(self, loader_version: LoaderVersion) -> DependencySpec:
        if loader_version.path is not None:
            return DependencySpec(
                coordinate=self.config.loader_coordinate.format(version=loader_version.name),
                local_path=str(loader_version.path),
            )

        if loader_version.is_legacy:
            return DependencySpec(
                coordinate=self.config.legacy_loader_coordinate.format(version=loader_version.name),
                repository_url=self.config.legacy_fabric_maven_url,
            )

        return DependencySpec(
            coordinate=self.config.loader_coordinate.format(version=loader_version.name),
            repository_url=self.config.fabric_maven_url,
        )

    def intermediary_spec(self, game_version: str) -> DependencySpec:
        return DependencySpec(
            coordinate=self.config.intermediary_coordinate.format(game_version=game_version),
            repository_url=self.config.intermediary_maven_url,
        )

    def descriptor_url(self, loader_version: LoaderVersion) -> str:
        # The descriptor sits next to the loader jar, with a .json extension
        return self.loader_spec(
            LoaderVersion(name=loader_version.name, family=loader_version.family)
        ).url("json")

    def _old_guava_specs(self, loader_version: LoaderVersion) -> List[DependencySpec]:
        specs = []
        if loader_version.is_legacy:
            specs.append(
                DependencySpec(
                    coordinate=self.config.mcguava_coordinate,
                    repository_url=self.config.mcguava_maven_url,
                )
            )
        for coordinate in self.config.legacy_logging_coordinates:
            specs.append(
                DependencySpec(
                    coordinate=coordinate,
                    repository_url=self.config.minecraft_libraries_url,
                )
            )
        return specs

    def _fetch_descriptor(self, loader_version: LoaderVersion) -> LoaderDescriptor:
        url = self.descriptor_url(loader_version)
        self.logger.log(f"Fetching loader descriptor from {url}", logging.INFO)

        if self._fetch_text is not None:
            text = self._fetch_text(url)
        else:
            if self.http_client is None:
                raise ValueError("DependencyResolver needs an http_client to fetch descriptors")
            text = FileUtils.read_text(self.logger, self.http_client, url)

        return LoaderDescriptor.from_json(text)

    def _read_embedded_descriptor(self, loader_version: LoaderVersion) -> LoaderDescriptor:
        path = loader_version.path
        self.logger.log(
            f"Reading loader descriptor {self.config.installer_descriptor_path} from {path}",
            logging.INFO,
        )
        text = ArchiveUtils.read_entry_text(path, self.config.installer_descriptor_path)

        try:
            return LoaderDescriptor.from_json(text)
        except DescriptorError as e:
            raise LocalArchiveReadError(str(path), str(e)) from e
