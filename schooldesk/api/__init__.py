"""
API module for the REST adapter.
"""

from .rest_api import SchoolDeskRestAPI

__all__ = [
    "SchoolDeskRestAPI",
]
