# pagewalk/__init__.py
"""
PageWalk package initializer.
Defines the package version and exposes the walker API.
"""
__version__ = "0.1.0"

from pagewalk.walker import FeedEntry, Page, PageWalker, walk

__all__ = ["__version__", "FeedEntry", "Page", "PageWalker", "walk"]
