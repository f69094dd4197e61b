"""Domain services - orchestrate business logic."""

import logging
from collections.abc import Iterable
from pathlib import Path

from ..ports.metadata import MetadataPort
from ..ports.storage import StoragePort
from ..ports.text import TextExtractorPort
from .extractor import parse
from .models import (
    BALANCE_LABEL,
    UNKNOWN_CATEGORY,
    DocumentRecord,
    RenameOutcome,
    RenameResult,
)
from .naming import build_filename, is_already_renamed

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_SIZE = 100_000_000
DEFAULT_MAX_FILENAME_LENGTH = 255


def log_fallbacks(name: str, record: DocumentRecord) -> None:
    """Report soft fallbacks so operators can review the result."""
    if record.is_fallback:
        logger.warning(f"{name}: nothing recognised beyond the date")
        return
    if record.category == UNKNOWN_CATEGORY:
        logger.warning(f"{name}: no document type recognised")
    if record.identifier is None:
        logger.debug(f"{name}: no ISIN found")
    if record.asset_label == BALANCE_LABEL:
        logger.warning(f"{name}: no asset name found, using {BALANCE_LABEL}")


class RenamingService:
    """Orchestrates extraction, naming and renaming of statements."""

    def __init__(
        self,
        text_extractor: TextExtractorPort,
        storage: StoragePort,
        metadata: MetadataPort | None = None,
        write_sidecar: bool = False,
        update_pdf: bool = False,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        max_filename_length: int = DEFAULT_MAX_FILENAME_LENGTH,
    ) -> None:
        self.text_extractor = text_extractor
        self.storage = storage
        self.metadata = metadata
        self.write_sidecar = write_sidecar
        self.update_pdf = update_pdf
        self.max_file_size = max_file_size
        self.max_filename_length = max_filename_length

    def inspect(self, path: Path) -> RenameResult:
        """Extract and name a document without touching it."""
        result = RenameResult(source_path=path)
        new_name = self._analyze(path, result)
        if new_name is not None:
            result.target_path = path.with_name(new_name)
        return result

    def process(self, path: Path, dry_run: bool = False) -> RenameResult:
        """Rename one document after its extracted metadata.

        Pipeline:
            1. Skip names already in the target scheme and oversized files
            2. Extract text
            3. Parse into a DocumentRecord
            4. Build the target filename
            5. Rename (or plan, in dry-run mode)
            6. Write metadata (if configured)

        Failures are recorded in the result, never raised.
        """
        result = RenameResult(source_path=path)
        logger.info(f"Processing: {path.name}")

        if is_already_renamed(path.name):
            logger.info(f"Skipping (already renamed): {path.name}")
            result.outcome = RenameOutcome.ALREADY_RENAMED
            return result

        try:
            new_name = self._analyze(path, result)
            if new_name is None:
                return result

            if dry_run:
                result.target_path = self.storage.plan(path, new_name)
                if result.target_path == path:
                    result.outcome = RenameOutcome.UNCHANGED
                return result

            result.target_path = self.storage.rename(path, new_name)
            if result.target_path == path:
                result.outcome = RenameOutcome.UNCHANGED
            else:
                result.outcome = RenameOutcome.RENAMED

            self._write_metadata(result)

        except Exception as e:
            logger.exception(f"Processing failed: {e}")
            result.errors.append(str(e))
            if result.outcome not in (RenameOutcome.RENAMED, RenameOutcome.UNCHANGED):
                result.outcome = RenameOutcome.FAILED

        return result

    def process_many(
        self, paths: Iterable[Path], dry_run: bool = False
    ) -> list[RenameResult]:
        """Process documents independently; one failure never stops the rest."""
        return [self.process(path, dry_run=dry_run) for path in paths]

    def _analyze(self, path: Path, result: RenameResult) -> str | None:
        """Fill in record and outcome; return the target name or None."""
        size = path.stat().st_size
        if size > self.max_file_size:
            logger.warning(f"Skipping large file ({size} bytes): {path.name}")
            result.outcome = RenameOutcome.TOO_LARGE
            return None

        try:
            text = self.text_extractor.extract_text(path.read_bytes())
        except Exception as e:
            logger.error(f"Error extracting text from {path.name}: {e}")
            result.errors.append(f"Text extraction failed: {e}")
            result.outcome = RenameOutcome.EXTRACTION_FAILED
            return None
        result.text_length = len(text)

        record = parse(text)
        if record is None:
            logger.warning(f"Could not parse {path.name}")
            result.errors.append("No valid document date found")
            result.outcome = RenameOutcome.UNPARSEABLE
            return None
        result.record = record
        log_fallbacks(path.name, record)

        new_name = build_filename(record, path.name)
        if len(new_name) > self.max_filename_length:
            logger.warning(f"Generated filename too long for {path.name}")
            result.errors.append(f"Generated filename too long: {len(new_name)}")
            result.outcome = RenameOutcome.FAILED
            return None

        result.outcome = RenameOutcome.PLANNED
        return new_name

    def _write_metadata(self, result: RenameResult) -> None:
        if self.metadata is None or result.record is None:
            return
        if result.target_path is None:
            return
        if self.update_pdf:
            self.metadata.update_pdf(result.target_path, result.record)
        if self.write_sidecar:
            result.sidecar_path = self.metadata.write_sidecar(
                result.target_path, result.record
            )
