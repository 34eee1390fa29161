"""
Assembly of the server launch jar.

The launch jar always holds a manifest and the launch properties. With the EMBED
strategy it additionally carries the contents of every library. Ordinary entries
are first-writer-wins and service definitions are unioned across libraries.
Signature files are dropped.
"""

import logging
import os
import pathlib
import re
import shutil
import zipfile
import zlib
from enum import Enum
from typing import List, Optional, Sequence, Set, Union

from launchjar.archive_assembler.manifest import MANIFEST_PATH, JarManifest
from launchjar.archive_assembler.services import ServiceRegistry
from launchjar.launchjar_config import InstallerConfig
from launchjar.launchjar_exceptions import ArchiveWriteError, LocalArchiveReadError
from launchjar.launchjar_logger import LaunchjarLogger
from launchjar.progress import InstallerProgress, NullProgress, progress_message
from launchjar.runtime_dependency_models import PackagingStrategy

SIGNATURE_FILE_PATTERN = re.compile(r"META-INF/[^/]+\.(SF|DSA|RSA|EC)")
COPY_BUFFER_SIZE = 32768

PathLike = Union[str, pathlib.Path]


class EntryAction(Enum):
    """
    What happens to a library entry during an embedding merge
    """

    SERVICE = "service"
    SIGNATURE = "signature"
    DUPLICATE = "duplicate"
    COPY = "copy"


class LaunchJarAssembler:
    """
    Writes server launch jars
    """

    def __init__(
        self,
        config: InstallerConfig,
        logger: LaunchjarLogger,
        progress: Optional[InstallerProgress] = None,
    ):
        self.config = config
        self.logger = logger
        self.progress = progress or NullProgress()

    def assemble(
        self,
        output_path: PathLike,
        launch_main_class: str,
        manifest_main_class: str,
        library_files: Sequence[PathLike],
        strategy: PackagingStrategy,
    ) -> None:
        """
        Write the launch jar to `output_path`, replacing any existing file.

        Args:
            output_path: The launch jar to write
            launch_main_class: Main class recorded in the launch properties
            manifest_main_class: Main-Class of the launch jar's manifest
            library_files: Local library jars, in install order
            strategy: Whether libraries are embedded or referenced by the manifest Class-Path

        Raises:
            ArchiveWriteError: If the launch jar cannot be written
            LocalArchiveReadError: If a library cannot be read while embedding
        """
        output_path = pathlib.Path(output_path)
        library_files = [pathlib.Path(f) for f in library_files]

        try:
            if output_path.exists():
                output_path.unlink()

            with zipfile.ZipFile(output_path, "w", compression=zipfile.ZIP_DEFLATED) as out:
                manifest = self.build_manifest(output_path, manifest_main_class, library_files, strategy)
                out.writestr(MANIFEST_PATH, manifest.to_bytes())
                out.writestr(
                    self.config.launch_properties_path,
                    f"launch.mainClass={launch_main_class}\n".encode("utf-8"),
                )

                if strategy is PackagingStrategy.EMBED:
                    self._embed_libraries(out, library_files)
        except OSError as e:
            raise ArchiveWriteError(str(output_path), str(e)) from e

        self.logger.log(f"Wrote launch jar {output_path} ({strategy.value})", logging.INFO)

    def build_manifest(
        self,
        output_path: pathlib.Path,
        manifest_main_class: str,
        library_files: List[pathlib.Path],
        strategy: PackagingStrategy,
    ) -> JarManifest:
        manifest = JarManifest()
        manifest.set(JarManifest.MANIFEST_VERSION, "1.0")
        manifest.set(JarManifest.MAIN_CLASS, manifest_main_class)

        if strategy is PackagingStrategy.CLASSPATH:
            manifest.set(
                JarManifest.CLASS_PATH,
                " ".join(self.relative_class_path(output_path, f) for f in library_files),
            )

        return manifest

    @staticmethod
    def relative_class_path(output_path: pathlib.Path, library_file: pathlib.Path) -> str:
        """
        Path of the library relative to the launch jar's directory, normalized and `/`-separated.
        """
        output_dir = os.path.dirname(os.path.abspath(output_path))
        relative = os.path.normpath(os.path.relpath(os.path.abspath(library_file), output_dir))
        return pathlib.PurePath(relative).as_posix()

    def classify(self, name: str, added: Set[str]) -> EntryAction:
        if ServiceRegistry.is_service_file(name):
            return EntryAction.SERVICE
        if SIGNATURE_FILE_PATTERN.fullmatch(name):
            return EntryAction.SIGNATURE
        if name in added:
            return EntryAction.DUPLICATE
        return EntryAction.COPY

    def _embed_libraries(self, out: zipfile.ZipFile, library_files: List[pathlib.Path]) -> None:
        added = {MANIFEST_PATH, self.config.launch_properties_path}
        services = ServiceRegistry()

        for library_file in library_files:
            self.progress.update_progress(
                progress_message("generating.launch.jar.library", library_file.name)
            )
            self._embed_library(out, library_file, added, services)

        for name, definitions in services.items():
            out.writestr(name, ServiceRegistry.render(definitions))

        self.logger.log(
            f"Embedded {len(added) - 2} entries and {len(services)} service files",
            logging.DEBUG,
        )

    def _embed_library(
        self,
        out: zipfile.ZipFile,
        library_file: pathlib.Path,
        added: Set[str],
        services: ServiceRegistry,
    ) -> None:
        try:
            source = zipfile.ZipFile(library_file)
        except (OSError, zipfile.BadZipFile) as e:
            raise LocalArchiveReadError(str(library_file), str(e)) from e

        with source:
            try:
                self._embed_entries(out, source, library_file, added, services)
            except (zipfile.BadZipFile, zlib.error) as e:
                raise LocalArchiveReadError(str(library_file), str(e)) from e

    def _embed_entries(
        self,
        out: zipfile.ZipFile,
        source: zipfile.ZipFile,
        library_file: pathlib.Path,
        added: Set[str],
        services: ServiceRegistry,
    ) -> None:
        for info in source.infolist():
            if info.is_dir():
                continue

            name = info.filename
            action = self.classify(name, added)

            if action is EntryAction.SERVICE:
                with source.open(info) as stream:
                    services.merge(name, stream)
            elif action is EntryAction.SIGNATURE:
                continue
            elif action is EntryAction.DUPLICATE:
                if name == MANIFEST_PATH:
                    # every library carries its own manifest
                    self.logger.log(f"Skipping manifest of {library_file.name}", logging.DEBUG)
                else:
                    self.logger.log(f"duplicate file: {name}", logging.WARNING)
            else:
                added.add(name)
                self._copy_entry(source, info, out)

    @staticmethod
    def _copy_entry(source: zipfile.ZipFile, info: zipfile.ZipInfo, out: zipfile.ZipFile) -> None:
        entry = zipfile.ZipInfo(info.filename, date_time=info.date_time)
        entry.compress_type = zipfile.ZIP_DEFLATED
        with source.open(info) as src, out.open(entry, "w") as dst:
            shutil.copyfileobj(src, dst, COPY_BUFFER_SIZE)
