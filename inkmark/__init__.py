"""
Inkmark: bookmarks and highlight annotations for sectioned documents.
"""
__version__ = "0.1.0"
