"""
Pydantic data models for the loader descriptor (fabric-installer.json).

The descriptor is published next to every loader jar on the maven, and embedded
inside the loader jar itself:

{
  "version": 1,
  "libraries": {
    "client": [...],
    "common": [{"name": "group:artifact:version", "url": "https://maven.example/"}, ...],
    "server": [...]
  },
  "mainClass": {
    "client": "...",
    "server": "..."
  }
}
"""

import json
from typing import List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from launchjar.launchjar_exceptions import DescriptorError, InvalidCoordinateError
from launchjar.runtime_dependency_models.library import DependencySpec


class LibraryEntry(BaseModel):
    """
    A library listed by the descriptor. `url` is the repository base, not the file URL.
    """

    name: str = Field(..., description="Coordinate group:artifact:version")
    url: Optional[str] = Field(None, description="Repository base URL")

    class Config:
        extra = "allow"

    def to_spec(self, default_repository_url: str) -> DependencySpec:
        return DependencySpec(
            coordinate=self.name,
            repository_url=self.url or default_repository_url,
        )


class LoaderLibraries(BaseModel):
    """
    Library lists per side. Only `common` and `server` matter for a server install.
    """

    common: List[LibraryEntry] = Field(default_factory=list)
    server: List[LibraryEntry] = Field(default_factory=list)
    client: List[LibraryEntry] = Field(default_factory=list)

    class Config:
        extra = "allow"


class LoaderMainClass(BaseModel):
    server: str
    client: Optional[str] = None

    class Config:
        extra = "allow"


class LoaderDescriptor(BaseModel):
    """
    Complete loader descriptor.
    """

    version: Optional[int] = None
    libraries: LoaderLibraries = Field(default_factory=LoaderLibraries)
    main_class: Union[LoaderMainClass, str] = Field(..., alias="mainClass")

    class Config:
        extra = "allow"
        populate_by_name = True

    @property
    def server_main_class(self) -> str:
        if isinstance(self.main_class, str):
            return self.main_class
        return self.main_class.server

    def common_specs(self, default_repository_url: str) -> List[DependencySpec]:
        return self._to_specs(self.libraries.common, default_repository_url)

    def server_specs(self, default_repository_url: str) -> List[DependencySpec]:
        return self._to_specs(self.libraries.server, default_repository_url)

    @staticmethod
    def _to_specs(entries: List[LibraryEntry], default_repository_url: str) -> List[DependencySpec]:
        try:
            return [entry.to_spec(default_repository_url) for entry in entries]
        except InvalidCoordinateError as e:
            raise DescriptorError(f"Invalid library in loader descriptor: {e}") from e

    @classmethod
    def from_json(cls, text: str) -> "LoaderDescriptor":
        """
        Parse a descriptor document.

        Raises:
            DescriptorError: If the text is not JSON or does not match the descriptor schema
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DescriptorError(f"Loader descriptor is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise DescriptorError("Loader descriptor must be a JSON object")

        try:
            return cls(**data)
        except ValidationError as e:
            raise DescriptorError(f"Invalid loader descriptor: {e}") from e
