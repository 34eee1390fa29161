"""
Server launch jar assembly.

This package handles:
1. Writing the launch jar manifest and launch properties
2. Embedding library contents, or referencing libraries through the manifest Class-Path
3. Merging service definition files across libraries
4. Dropping signature files of embedded libraries
"""

from .assembler import LaunchJarAssembler, EntryAction
from .manifest import JarManifest, MANIFEST_PATH
from .services import ServiceRegistry

__all__ = [
    "LaunchJarAssembler",
    "EntryAction",
    "JarManifest",
    "MANIFEST_PATH",
    "ServiceRegistry",
]
