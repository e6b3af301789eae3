"""pagewalk.walker: lazy paginated walker and the HTTP fetcher that feeds it."""

from pagewalk.walker.models import FeedEntry, Page
from pagewalk.walker.walker import PageWalker, walk

__all__ = ["FeedEntry", "Page", "PageWalker", "walk"]
