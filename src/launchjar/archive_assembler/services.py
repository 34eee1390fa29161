"""
Merging of service definition files (META-INF/services/<interface>).

Every library may contribute to the same service file; the launch jar gets the union
of all contributions, in first-seen order.
"""

import io
from typing import IO, Dict, Iterator, List, Tuple

SERVICES_DIR = "META-INF/services/"


class ServiceRegistry:
    """
    Accumulates service definitions for one launch jar
    """

    def __init__(self):
        # dicts keep insertion order and serve as ordered sets
        self._services: Dict[str, Dict[str, None]] = {}

    @staticmethod
    def is_service_file(name: str) -> bool:
        """
        True for files directly inside META-INF/services/, not in a subdirectory.
        """
        return (
            name.startswith(SERVICES_DIR)
            and len(name) > len(SERVICES_DIR)
            and "/" not in name[len(SERVICES_DIR):]
        )

    @staticmethod
    def clean_line(line: str) -> str:
        """
        Strip the comment (everything from `#`) and surrounding whitespace.
        """
        pos = line.find("#")
        if pos >= 0:
            line = line[:pos]
        return line.strip()

    def merge(self, name: str, stream: IO[bytes]) -> None:
        """
        Add the definitions read from `stream` to the service file `name`.
        A file without any definition does not register the path.
        """
        reader = io.TextIOWrapper(stream, encoding="utf-8", errors="replace")
        for line in reader:
            line = self.clean_line(line)
            if not line:
                continue
            self._services.setdefault(name, {})[line] = None

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        for name, definitions in self._services.items():
            yield name, list(definitions)

    @staticmethod
    def render(definitions: List[str]) -> bytes:
        return "".join(f"{definition}\n" for definition in definitions).encode("utf-8")

    def __len__(self) -> int:
        return len(self._services)
