"""Domain models."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path

UNKNOWN_CATEGORY = "Unbekannt"
BALANCE_LABEL = "Guthaben"


@dataclass(frozen=True)
class DocumentRecord:
    """Metadata extracted from a single brokerage statement."""

    date: date
    category: str
    identifier: str | None  # ISIN, checksum-validated
    asset_label: str

    @property
    def is_fallback(self) -> bool:
        """True if nothing beyond the date could be classified."""
        return (
            self.category == UNKNOWN_CATEGORY
            and self.identifier is None
            and self.asset_label == BALANCE_LABEL
        )


class RenameOutcome(str, Enum):
    """What happened to a single file."""

    RENAMED = "renamed"
    PLANNED = "planned"
    UNCHANGED = "unchanged"
    ALREADY_RENAMED = "already_renamed"
    TOO_LARGE = "too_large"
    EXTRACTION_FAILED = "extraction_failed"
    UNPARSEABLE = "unparseable"
    FAILED = "failed"


SUCCESS_OUTCOMES = frozenset(
    {RenameOutcome.RENAMED, RenameOutcome.PLANNED, RenameOutcome.UNCHANGED}
)
SKIP_OUTCOMES = frozenset({RenameOutcome.ALREADY_RENAMED, RenameOutcome.TOO_LARGE})


@dataclass
class RenameResult:
    """Result of processing one file."""

    source_path: Path
    outcome: RenameOutcome = RenameOutcome.FAILED
    record: DocumentRecord | None = None
    target_path: Path | None = None
    sidecar_path: Path | None = None
    text_length: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.outcome in SUCCESS_OUTCOMES and not self.errors

    @property
    def skipped(self) -> bool:
        return self.outcome in SKIP_OUTCOMES
