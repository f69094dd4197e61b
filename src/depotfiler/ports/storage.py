"""Storage port - interface for renaming files."""

from abc import ABC, abstractmethod
from pathlib import Path


class StoragePort(ABC):
    """Interface for file renaming."""

    @abstractmethod
    def rename(self, path: Path, new_name: str) -> Path:
        """Rename a file within its directory.

        Must not overwrite an existing file. Returns the final path, which
        may differ from ``new_name`` on collision.
        """
        pass

    @abstractmethod
    def plan(self, path: Path, new_name: str) -> Path:
        """Return the path ``rename`` would produce, without touching files."""
        pass
