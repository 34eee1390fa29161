"""
Reading and writing of jar manifests (META-INF/MANIFEST.MF).

Only the main section is modelled. Output follows the jar file format: CRLF line
endings, lines no longer than 72 bytes with single-space continuation lines, and a
blank line terminating the section.
"""

from typing import Dict, Optional

MANIFEST_PATH = "META-INF/MANIFEST.MF"
LINE_LIMIT = 72


class JarManifest:
    """
    Main attributes of a jar manifest, kept in insertion order
    """

    MANIFEST_VERSION = "Manifest-Version"
    MAIN_CLASS = "Main-Class"
    CLASS_PATH = "Class-Path"

    def __init__(self, main_attributes: Optional[Dict[str, str]] = None):
        self.main_attributes: Dict[str, str] = dict(main_attributes or {})

    def get(self, name: str) -> Optional[str]:
        """
        Look up an attribute. Attribute names are case-insensitive.
        """
        for key, value in self.main_attributes.items():
            if key.lower() == name.lower():
                return value
        return None

    def set(self, name: str, value: str) -> None:
        self.main_attributes[name] = value

    def to_bytes(self) -> bytes:
        out = bytearray()

        # Manifest-Version is always written first
        version = self.get(self.MANIFEST_VERSION)
        if version is not None:
            out += _wrap_line(f"{self.MANIFEST_VERSION}: {version}")

        for name, value in self.main_attributes.items():
            if name.lower() == self.MANIFEST_VERSION.lower():
                continue
            out += _wrap_line(f"{name}: {value}")

        out += b"\r\n"
        return bytes(out)

    @classmethod
    def parse(cls, data: bytes) -> "JarManifest":
        """
        Parse the main section of a manifest.

        Raises:
            ValueError: If the manifest is not UTF-8 or a line is malformed
        """
        text = data.decode("utf-8")
        attributes: Dict[str, str] = {}
        last_name = None

        for line in text.splitlines():
            if not line:
                break
            if line.startswith(" "):
                if last_name is None:
                    raise ValueError("Manifest starts with a continuation line")
                attributes[last_name] += line[1:]
                continue

            name, sep, value = line.partition(":")
            if not sep or not name.strip():
                raise ValueError(f"Malformed manifest line: {line!r}")
            last_name = name.strip()
            attributes[last_name] = value[1:] if value.startswith(" ") else value

        return cls(attributes)


def _wrap_line(line: str) -> bytes:
    # Break on character boundaries so multi-byte characters are never split
    out = bytearray()
    current = bytearray()
    for char in line:
        encoded = char.encode("utf-8")
        if len(current) + len(encoded) > LINE_LIMIT:
            out += current + b"\r\n"
            current = bytearray(b" ")
        current += encoded
    out += current + b"\r\n"
    return bytes(out)
