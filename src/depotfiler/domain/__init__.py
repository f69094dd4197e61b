"""Domain layer - core business logic."""

from .extractor import parse
from .models import DocumentRecord, RenameOutcome, RenameResult
from .naming import build_filename, is_already_renamed, sanitize_component

__all__ = [
    "DocumentRecord",
    "RenameOutcome",
    "RenameResult",
    "build_filename",
    "is_already_renamed",
    "parse",
    "sanitize_component",
]
