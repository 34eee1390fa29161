"""
Configuration parameters for launchjar.

Every repository URL, coordinate template, archive path and version threshold the
resolver and assembler rely on lives here, so a mirror or a fork of the loader can be
targeted from a `launchjar.toml` file without code changes:

```toml
[installer]
fabric_maven_url = "https://mirror.example.com/fabric/"
request_timeout = 60
```
"""

import dataclasses
import os
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

try:
    import tomllib
except ModuleNotFoundError:
    # Python < 3.11
    import tomli as tomllib

from launchjar.launchjar_exceptions import LaunchjarException

CONFIG_FILE_NAME = "launchjar.toml"


@dataclass
class InstallerConfig:
    """
    Configuration parameters
    """

    fabric_maven_url: str = "https://maven.fabricmc.net/"
    legacy_fabric_maven_url: str = "https://maven.legacyfabric.net/"
    intermediary_maven_url: str = "https://maven.legacyfabric.net/"
    minecraft_libraries_url: str = "https://libraries.minecraft.net/"
    mcguava_maven_url: str = "https://repo.blucobalt.dev/repository/maven-hosted/"

    loader_coordinate: str = "net.fabricmc:fabric-loader:{version}"
    legacy_loader_coordinate: str = "net.fabricmc:fabric-loader-1.8.9:{version}"
    intermediary_coordinate: str = "net.fabricmc:intermediary:{game_version}"
    mcguava_coordinate: str = "dev.blucobalt:mcguava:0.07"
    legacy_logging_coordinates: List[str] = field(
        default_factory=lambda: [
            "org.apache.logging.log4j:log4j-api:2.8.1",
            "org.apache.logging.log4j:log4j-core:2.8.1",
        ]
    )

    # Path of the loader descriptor inside a loader jar
    installer_descriptor_path: str = "fabric-installer.json"
    default_launcher_main_class: str = "net.fabricmc.loader.launch.server.FabricServerLauncher"
    launch_jar_name: str = "fabric-server-launch.jar"
    launch_properties_path: str = "fabric-server-launch.properties"
    libraries_dir_name: str = "libraries"

    # Loaders up to and including this version need their libraries embedded in the launch jar
    embed_max_loader_version: str = "0.12.5"
    # Games up to and including this version take the descriptor's server libraries,
    # newer games get the guava shim and log4j instead
    server_libraries_max_game_version: str = "1.8.9"
    legacy_incompatible_game_version: str = "1.8.9"

    request_timeout: float = 30.0

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "InstallerConfig":
        """
        Create an InstallerConfig instance from a dictionary
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(env) - known)
        if unknown:
            raise LaunchjarException(f"Unknown installer configuration keys: {', '.join(unknown)}")

        return cls(**env)

    @classmethod
    def from_toml(cls, path: Union[str, pathlib.Path]) -> "InstallerConfig":
        """
        Load the `[installer]` table of a TOML file.

        Raises:
            LaunchjarException: If the file cannot be read or parsed
        """
        try:
            with open(path, "rb") as f:
                toml_dict = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise LaunchjarException(f"Failed to load {path}: {e}") from e

        section = toml_dict.get("installer", {})
        if not isinstance(section, dict):
            raise LaunchjarException(f"'installer' in {path} must be a table")

        return cls.from_dict(section)

    @classmethod
    def load(cls, workspace_root: Optional[str] = None) -> "InstallerConfig":
        """
        Load `launchjar.toml` from the workspace root if it exists, else return the defaults.
        """
        config_path = os.path.join(workspace_root or os.getcwd(), CONFIG_FILE_NAME)

        if not os.path.exists(config_path):
            return cls()

        return cls.from_toml(config_path)
