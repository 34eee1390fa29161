"""
Data models for the libraries that make up a server launch jar, and the plan for packaging them.
"""

import dataclasses
import pathlib
import re
from enum import Enum
from typing import Optional

from launchjar.launchjar_exceptions import InvalidCoordinateError


@dataclasses.dataclass(frozen=True)
class Coordinate:
    """
    Maven coordinates (group, artifact, version and an optional classifier).
    """

    group: str
    artifact: str
    version: str
    classifier: Optional[str] = None

    @classmethod
    def parse(cls, coordinate: str) -> "Coordinate":
        """
        Parse `group:artifact:version[:classifier]`.

        Raises:
            InvalidCoordinateError: If the coordinate has the wrong number of parts or an empty part
        """
        parts = coordinate.split(":")
        if len(parts) not in (3, 4) or not all(parts):
            raise InvalidCoordinateError(
                f"Invalid coordinate {coordinate!r}, expected group:artifact:version[:classifier]"
            )
        return cls(*parts)

    def relative_path(self, extension: str = "jar") -> str:
        """
        Repository-relative path, e.g. `net/fabricmc/fabric-loader/0.12.5/fabric-loader-0.12.5.jar`.
        """
        classifier = f"-{self.classifier}" if self.classifier else ""
        file_name = f"{self.artifact}-{self.version}{classifier}.{extension}"
        return "/".join(
            [self.group.replace(".", "/"), self.artifact, self.version, file_name]
        )

    def __str__(self) -> str:
        parts = [self.group, self.artifact, self.version]
        if self.classifier:
            parts.append(self.classifier)
        return ":".join(parts)


@dataclasses.dataclass(frozen=True)
class DependencySpec:
    """
    A library of the launch jar: fetched from `repository_url` unless `local_path` is set, in
    which case the local file is copied instead.
    """

    coordinate: str
    repository_url: Optional[str] = None
    local_path: Optional[str] = None

    def __post_init__(self):
        Coordinate.parse(self.coordinate)
        if self.repository_url is None and self.local_path is None:
            raise InvalidCoordinateError(
                f"Library {self.coordinate} has neither a repository URL nor a local path"
            )

    @property
    def parsed(self) -> Coordinate:
        return Coordinate.parse(self.coordinate)

    @property
    def is_local(self) -> bool:
        return self.local_path is not None

    @property
    def relative_path(self) -> str:
        return self.parsed.relative_path()

    @property
    def file_name(self) -> str:
        return self.relative_path.rsplit("/", 1)[-1]

    def url(self, extension: str = "jar") -> str:
        if self.repository_url is None:
            raise InvalidCoordinateError(f"Library {self.coordinate} has no repository URL")
        base = self.repository_url if self.repository_url.endswith("/") else self.repository_url + "/"
        return base + self.parsed.relative_path(extension)


@dataclasses.dataclass(frozen=True)
class ResolvedLibrary:
    """
    A library whose content has been materialized on disk.
    """

    spec: DependencySpec
    local_file: pathlib.Path


class LoaderFamily(str, Enum):
    """
    Loader lines, each published to its own maven with its own version scheme.
    """

    STANDARD = "standard"
    LEGACY = "legacy"


# Legacy loader builds carry build metadata, e.g. 0.11.3+legacy.1.8.9
_LEGACY_VERSION_PATTERN = re.compile(r"^\d+(\.\d+)*\+.+$")


@dataclasses.dataclass(frozen=True)
class LoaderVersion:
    """
    The loader to install. `path` points at a local loader jar to use instead of downloading one.
    """

    name: str
    family: LoaderFamily = LoaderFamily.STANDARD
    path: Optional[pathlib.Path] = None

    @classmethod
    def from_name(
        cls,
        name: str,
        family: Optional[LoaderFamily] = None,
        path: Optional[pathlib.Path] = None,
    ) -> "LoaderVersion":
        """
        Create a LoaderVersion, detecting the family from the version scheme unless it is given.
        """
        if family is None:
            family = LoaderFamily.LEGACY if _LEGACY_VERSION_PATTERN.match(name) else LoaderFamily.STANDARD
        return cls(name=name, family=family, path=path)

    @property
    def is_legacy(self) -> bool:
        return self.family is LoaderFamily.LEGACY


class PackagingStrategy(str, Enum):
    """
    How the libraries end up in the launch jar
    """

    # copy every library entry into the launch jar
    EMBED = "embed"
    # leave libraries as sibling files referenced by the manifest Class-Path
    CLASSPATH = "classpath"


@dataclasses.dataclass(frozen=True)
class PackagingPlan:
    """
    Entry points and packaging strategy of a launch jar.

    `launch_main_class` is the game-side main class recorded in the launch properties,
    `manifest_main_class` the launcher written as the manifest Main-Class.
    """

    launch_main_class: str
    manifest_main_class: str
    strategy: PackagingStrategy

    @property
    def embed_dependencies(self) -> bool:
        return self.strategy is PackagingStrategy.EMBED
