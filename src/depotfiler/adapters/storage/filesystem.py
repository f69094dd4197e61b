"""Storage adapter using local filesystem."""

import logging
import shutil
from pathlib import Path

from ...ports.storage import StoragePort

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255


def validate_name(name: str) -> None:
    """Reject names that are empty, too long or could leave the directory."""
    if not name or name in (".", ".."):
        raise ValueError(f"Invalid filename: {name!r}")
    if any(ch in name for ch in ("/", "\\", "\x00")):
        raise ValueError(f"Filename contains a path separator: {name!r}")
    if len(name) > MAX_NAME_LENGTH:
        raise ValueError(f"Filename longer than {MAX_NAME_LENGTH} characters")


def _same_file(a: Path, b: Path) -> bool:
    try:
        return a.samefile(b)
    except OSError:
        return False


class FilesystemAdapter(StoragePort):
    """Renames files in place, confined to a root directory."""

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()

    def _ensure_inside(self, path: Path) -> None:
        if not path.resolve().is_relative_to(self.root):
            raise ValueError(f"Refusing to touch path outside {self.root}: {path}")

    def plan(self, path: Path, new_name: str) -> Path:
        """Resolve the destination, appending _1, _2, ... on collision."""
        validate_name(new_name)
        self._ensure_inside(path)
        dest_dir = path.parent
        self._ensure_inside(dest_dir)

        dest = dest_dir / new_name
        stem = dest.stem
        counter = 1
        while dest.exists():
            if _same_file(dest, path):
                return path
            dest = dest_dir / f"{stem}_{counter}{dest.suffix}"
            counter += 1

        validate_name(dest.name)
        self._ensure_inside(dest)
        return dest

    def rename(self, path: Path, new_name: str) -> Path:
        dest = self.plan(path, new_name)
        if dest == path:
            logger.debug(f"Already named: {path.name}")
            return path

        shutil.move(str(path), dest)
        logger.info(f"Renamed: {path.name} -> {dest.name}")
        return dest
