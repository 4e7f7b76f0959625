# frontend/__init__.py
"""
Client side of the movies app: the API client and pagination helpers.
"""

from .api import ApiError, MovieApiClient
from .pagination import PageWindow, page_window

__all__ = ["ApiError", "MovieApiClient", "PageWindow", "page_window"]
