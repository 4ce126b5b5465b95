"""
Seed collaborators: fetching the note and extracting people and places from it.
"""

from .extractor import SeedExtractor
from .fetcher import SeedFetcher
from .models import SeedEntities

__all__ = ["SeedExtractor", "SeedFetcher", "SeedEntities"]
