"""
Services package for the GH News site.

- ``SearchIndexingService``: tells search engines about published articles
"""

from .indexing_service import SearchIndexingService

__all__ = ['SearchIndexingService']
