"""
Record Catalog Core Package
Ordered, concurrency-safe in-memory record catalog
"""

__version__ = "1.0.0"
__author__ = "Record Catalog Team"

from . import catalog

__all__ = ["catalog"]
