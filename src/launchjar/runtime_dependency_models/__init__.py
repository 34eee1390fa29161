"""
Runtime dependency models for the server launch jar.

This package provides the data models for the loader descriptor (parsed with
Pydantic) and for the libraries, loader versions and packaging plans that flow
from the resolver through the downloader into the archive assembler.
"""

from .library import (
    Coordinate,
    DependencySpec,
    ResolvedLibrary,
    LoaderFamily,
    LoaderVersion,
    PackagingStrategy,
    PackagingPlan,
)
from .loader_descriptor import (
    LoaderDescriptor,
    LoaderLibraries,
    LoaderMainClass,
    LibraryEntry,
)

__all__ = [
    # Libraries
    "Coordinate",
    "DependencySpec",
    "ResolvedLibrary",
    "LoaderFamily",
    "LoaderVersion",
    "PackagingStrategy",
    "PackagingPlan",
    # Loader descriptor
    "LoaderDescriptor",
    "LoaderLibraries",
    "LoaderMainClass",
    "LibraryEntry",
]
