"""
Runtime dependency resolution.

This package handles:
1. Validating the loader and game version pairing
2. Loading the loader descriptor, from the loader maven or from a local loader jar
3. Building the ordered library list, including compatibility libraries for old games
4. Choosing the packaging strategy of the launch jar
"""

from .resolver import DependencyResolver, ResolutionResult

__all__ = ["DependencyResolver", "ResolutionResult"]
