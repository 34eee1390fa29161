"""
Tests for installer configuration and logging.
"""

import json
import logging

import pytest

from launchjar.launchjar_config import CONFIG_FILE_NAME, InstallerConfig
from launchjar.launchjar_exceptions import LaunchjarException
from launchjar.launchjar_logger import LaunchjarLogger


class TestInstallerConfig:
    def test_defaults(self):
        config = InstallerConfig()

        assert config.embed_max_loader_version == "0.12.5"
        assert config.launch_jar_name == "fabric-server-launch.jar"
        assert config.legacy_logging_coordinates == [
            "org.apache.logging.log4j:log4j-api:2.8.1",
            "org.apache.logging.log4j:log4j-core:2.8.1",
        ]

    def test_from_dict(self):
        config = InstallerConfig.from_dict({"request_timeout": 5, "libraries_dir_name": "libs"})

        assert config.request_timeout == 5
        assert config.libraries_dir_name == "libs"

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(LaunchjarException) as excinfo:
            InstallerConfig.from_dict({"fabric_maven": "https://x/"})

        assert "fabric_maven" in str(excinfo.value)

    def test_from_toml(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text('[installer]\nfabric_maven_url = "https://mirror.example.com/"\n')

        assert InstallerConfig.from_toml(path).fabric_maven_url == "https://mirror.example.com/"

    def test_from_toml_without_installer_table(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text('[other]\nkey = 1\n')

        assert InstallerConfig.from_toml(path) == InstallerConfig()

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text("[installer\n")

        with pytest.raises(LaunchjarException):
            InstallerConfig.from_toml(path)

    def test_load_defaults_without_file(self, tmp_path):
        assert InstallerConfig.load(str(tmp_path)) == InstallerConfig()

    def test_load_from_workspace_root(self, tmp_path):
        (tmp_path / CONFIG_FILE_NAME).write_text('[installer]\nembed_max_loader_version = "0.13.0"\n')

        assert InstallerConfig.load(str(tmp_path)).embed_max_loader_version == "0.13.0"


def test_logger_emits_json_lines(caplog):
    logger = LaunchjarLogger()

    with caplog.at_level(logging.INFO, logger="launchjar"):
        logger.log("Resolved 5 libraries\nfor 1.8.9", logging.INFO)

    (record,) = caplog.records
    line = json.loads(record.getMessage())
    assert line["level"] == "INFO"
    assert line["message"] == "Resolved 5 libraries for 1.8.9"
    assert line["caller_name"] == "test_logger_emits_json_lines"
    assert line["caller_file"] == "test_launchjar_config.py"


def test_logger_skips_disabled_levels(caplog):
    logger = LaunchjarLogger()

    with caplog.at_level(logging.WARNING, logger="launchjar"):
        logger.log("debug detail", logging.DEBUG)

    assert caplog.records == []
