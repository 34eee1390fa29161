"""
Tests for the dependency downloader.
"""

import pytest

from launchjar.launchjar_exceptions import LocalArchiveReadError, NetworkFetchError
from launchjar.runtime_dependency_downloader import DependencyDownloader
from launchjar.runtime_dependency_models import DependencySpec

ASM = DependencySpec("org.ow2.asm:asm:9.1", repository_url="https://maven.fabricmc.net/")
ASM_URL = "https://maven.fabricmc.net/org/ow2/asm/asm/9.1/asm-9.1.jar"


def test_downloads_to_maven_layout(tmp_path, logger, mock_client, progress):
    client = mock_client({ASM_URL: b"asm-bytes"})
    downloader = DependencyDownloader(tmp_path / "libraries", logger, http_client=client, progress=progress)

    library = downloader.download_dependency(ASM)

    assert library.spec == ASM
    assert library.local_file == tmp_path / "libraries" / "org/ow2/asm/asm/9.1/asm-9.1.jar"
    assert library.local_file.read_bytes() == b"asm-bytes"
    assert client.requested == [ASM_URL]
    assert progress.messages == ["Downloading library org.ow2.asm:asm:9.1"]


def test_copies_local_library(tmp_path, logger, progress):
    source = tmp_path / "my-loader.jar"
    source.write_bytes(b"loader-bytes")
    spec = DependencySpec("net.fabricmc:fabric-loader:0.12.5", local_path=str(source))
    downloader = DependencyDownloader(tmp_path / "libraries", logger, progress=progress)

    library = downloader.download_dependency(spec)

    assert library.local_file.read_bytes() == b"loader-bytes"
    assert library.local_file.relative_to(tmp_path / "libraries").as_posix() == (
        "net/fabricmc/fabric-loader/0.12.5/fabric-loader-0.12.5.jar"
    )
    assert progress.messages == ["Copying library net.fabricmc:fabric-loader:0.12.5"]


def test_download_all_keeps_order(tmp_path, logger, mock_client):
    guava = DependencySpec("com.google.guava:guava:21.0", repository_url="https://libraries.minecraft.net/")
    client = mock_client(
        {
            ASM_URL: b"asm",
            "https://libraries.minecraft.net/com/google/guava/guava/21.0/guava-21.0.jar": b"guava",
        }
    )
    downloader = DependencyDownloader(tmp_path / "libraries", logger, http_client=client)

    libraries = downloader.download_all([guava, ASM])

    assert [library.spec for library in libraries] == [guava, ASM]
    assert [library.local_file.read_bytes() for library in libraries] == [b"guava", b"asm"]


def test_failed_download(tmp_path, logger, mock_client):
    downloader = DependencyDownloader(tmp_path / "libraries", logger, http_client=mock_client({}))

    with pytest.raises(NetworkFetchError) as excinfo:
        downloader.download_all([ASM])

    assert excinfo.value.url == ASM_URL


def test_empty_download(tmp_path, logger, mock_client):
    downloader = DependencyDownloader(tmp_path / "libraries", logger, http_client=mock_client({ASM_URL: b""}))

    with pytest.raises(NetworkFetchError):
        downloader.download_dependency(ASM)


def test_missing_local_library(tmp_path, logger):
    spec = DependencySpec("net.fabricmc:fabric-loader:0.12.5", local_path=str(tmp_path / "missing.jar"))
    downloader = DependencyDownloader(tmp_path / "libraries", logger)

    with pytest.raises(LocalArchiveReadError):
        downloader.download_dependency(spec)
