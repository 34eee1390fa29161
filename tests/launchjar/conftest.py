"""
Shared fixtures for launchjar tests: fake jars, descriptors and HTTP transports.
"""

import io
import json
import pathlib
import zipfile
from typing import Dict, List, Optional, Union

import httpx
import pytest

from launchjar.launchjar_config import InstallerConfig
from launchjar.launchjar_logger import LaunchjarLogger

Entries = Dict[str, Union[bytes, str]]


def build_jar_bytes(entries: Entries, main_class: Optional[str] = None) -> bytes:
    """
    Build a jar in memory. Entries are written in the given order; names ending with `/` are directories.
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        if main_class is not None:
            zf.writestr(
                "META-INF/MANIFEST.MF",
                f"Manifest-Version: 1.0\r\nMain-Class: {main_class}\r\n\r\n",
            )
        for name, content in entries.items():
            if isinstance(content, str):
                content = content.encode("utf-8")
            zf.writestr(name, content)
    return buf.getvalue()


class RecordingProgress:
    def __init__(self):
        self.messages: List[str] = []

    def update_progress(self, text: str) -> None:
        self.messages.append(text)


@pytest.fixture
def logger():
    return LaunchjarLogger()


@pytest.fixture
def config():
    return InstallerConfig()


@pytest.fixture
def progress():
    return RecordingProgress()


@pytest.fixture
def jar_bytes():
    return build_jar_bytes


@pytest.fixture
def make_jar(tmp_path):
    """
    Factory writing a fake jar under tmp_path and returning its path.
    """

    def _make_jar(name: str, entries: Entries, main_class: Optional[str] = None) -> pathlib.Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_jar_bytes(entries, main_class))
        return path

    return _make_jar


@pytest.fixture
def read_jar():
    """
    Returns a function reading every entry of a jar into an ordered dict.
    """

    def _read_jar(path) -> Dict[str, bytes]:
        with zipfile.ZipFile(path) as zf:
            return {name: zf.read(name) for name in zf.namelist()}

    return _read_jar


SAMPLE_DESCRIPTOR = {
    "version": 1,
    "libraries": {
        "client": [],
        "common": [
            {"name": "net.fabricmc:tiny-mappings-parser:0.2.2.14", "url": "https://maven.fabricmc.net/"},
            {"name": "org.ow2.asm:asm:9.1", "url": "https://maven.fabricmc.net/"},
        ],
        "server": [
            {"name": "com.google.guava:guava:21.0", "url": "https://libraries.minecraft.net/"},
        ],
    },
    "mainClass": {
        "client": "net.fabricmc.loader.launch.knot.KnotClient",
        "server": "net.fabricmc.loader.launch.knot.KnotServer",
    },
}


@pytest.fixture
def descriptor_json():
    return json.dumps(SAMPLE_DESCRIPTOR)


@pytest.fixture
def mock_client():
    """
    Factory for an httpx.Client answering from a URL -> bytes map; unknown URLs get a 404.
    The returned client records requested URLs in `client.requested`.
    """
    clients = []

    def _mock_client(responses: Dict[str, bytes]) -> httpx.Client:
        requested: List[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            requested.append(url)
            if url not in responses:
                return httpx.Response(404, content=b"not found")
            return httpx.Response(200, content=responses[url])

        client = httpx.Client(transport=httpx.MockTransport(handler))
        client.requested = requested
        clients.append(client)
        return client

    yield _mock_client

    for client in clients:
        client.close()
