"""Metadata port - interface for PDF metadata and sidecar."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import DocumentRecord


class MetadataPort(ABC):
    """Interface for PDF metadata and sidecar handling."""

    @abstractmethod
    def update_pdf(self, path: Path, record: "DocumentRecord") -> None:
        """Update PDF metadata with the extracted record."""
        pass

    @abstractmethod
    def write_sidecar(self, path: Path, record: "DocumentRecord") -> Path:
        """Write sidecar file alongside PDF.

        Returns path to sidecar file.
        """
        pass
