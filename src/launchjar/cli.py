"""
Click CLI interface for launchjar.
"""

import logging
import pathlib
from typing import Optional

import click

from launchjar.launchjar_config import InstallerConfig
from launchjar.launchjar_exceptions import LaunchjarException
from launchjar.launchjar_logger import LaunchjarLogger
from launchjar.runtime_dependency_models import LoaderFamily, LoaderVersion
from launchjar.server_installer import ServerInstaller


class ConsoleProgress:
    """
    Prints progress messages to stdout
    """

    def update_progress(self, text: str) -> None:
        click.echo(text)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output")
def main(verbose: bool):
    """
    launchjar - Generates server launch jars for the loader.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option(
    "--dir",
    "install_dir",
    required=True,
    type=click.Path(file_okay=False, path_type=pathlib.Path),
    help="Server install directory",
)
@click.option("--loader", "loader_name", required=True, help="Loader version, e.g. 0.12.5")
@click.option("--game", "game_version", required=True, help="Game version, e.g. 1.8.9")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=pathlib.Path),
    help="Launch jar to write (default: <dir>/fabric-server-launch.jar)",
)
@click.option(
    "--loader-jar",
    type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path),
    help="Use a local loader jar instead of downloading one",
)
@click.option(
    "--legacy/--no-legacy",
    default=None,
    help="Force the legacy loader family (detected from the version by default)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path),
    help="TOML configuration file (default: ./launchjar.toml if present)",
)
def install(
    install_dir: pathlib.Path,
    loader_name: str,
    game_version: str,
    output: Optional[pathlib.Path],
    loader_jar: Optional[pathlib.Path],
    legacy: Optional[bool],
    config_path: Optional[pathlib.Path],
):
    """
    Install a server and generate its launch jar.
    """
    family = None
    if legacy is not None:
        family = LoaderFamily.LEGACY if legacy else LoaderFamily.STANDARD

    try:
        config = InstallerConfig.from_toml(config_path) if config_path else InstallerConfig.load()
        loader_version = LoaderVersion.from_name(loader_name, family=family, path=loader_jar)
        installer = ServerInstaller(config, LaunchjarLogger(), progress=ConsoleProgress())
        launch_jar = installer.install(install_dir, loader_version, game_version, launch_jar=output)
    except LaunchjarException as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Done, start the server with: java -jar {launch_jar}")


if __name__ == "__main__":
    main()
