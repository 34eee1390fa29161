"""
Runtime dependency downloader.

This package handles:
1. Downloading libraries from their repositories
2. Copying libraries supplied as local files
3. Verifying downloads
"""

from .downloader import DependencyDownloader

__all__ = ["DependencyDownloader"]
