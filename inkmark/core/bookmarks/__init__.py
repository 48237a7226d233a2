"""
Bookmarks and viewport tracking.
"""
from .manager import BookmarkList
from .viewport import ViewportTracker

__all__ = ['BookmarkList', 'ViewportTracker']
