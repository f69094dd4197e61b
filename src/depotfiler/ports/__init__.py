"""Ports - interfaces for external dependencies."""

from .metadata import MetadataPort
from .storage import StoragePort
from .text import TextExtractorPort

__all__ = ["MetadataPort", "StoragePort", "TextExtractorPort"]
