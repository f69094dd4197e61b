"""Metadata adapter using pikepdf and YAML."""

import logging
from datetime import datetime
from pathlib import Path

import pikepdf
import yaml

from ...domain.models import DocumentRecord
from ...ports.metadata import MetadataPort

logger = logging.getLogger(__name__)


def record_to_dict(record: DocumentRecord, source_file: str) -> dict:
    return {
        "date": record.date.isoformat(),
        "category": record.category,
        "isin": record.identifier,
        "asset": record.asset_label,
        "processed_at": datetime.now().isoformat(),
        "source_file": source_file,
    }


class PikePdfAdapter(MetadataPort):
    """Metadata implementation using pikepdf for PDF and YAML for sidecar."""

    def update_pdf(self, path: Path, record: DocumentRecord) -> None:
        logger.info(f"Updating PDF metadata: {path.name}")

        with pikepdf.open(path, allow_overwriting_input=True) as pdf:
            with pdf.open_metadata() as meta:
                meta["dc:title"] = record.asset_label
                meta["dc:subject"] = record.category
                meta["dc:date"] = record.date.isoformat()
                if record.identifier:
                    meta["dc:identifier"] = record.identifier

            pdf.save(path)

        logger.debug("PDF metadata updated")

    def write_sidecar(self, path: Path, record: DocumentRecord) -> Path:
        sidecar_path = path.with_suffix(".yaml")
        data = record_to_dict(record, path.name)

        logger.info(f"Writing sidecar: {sidecar_path.name}")
        sidecar_path.write_text(
            yaml.dump(data, default_flow_style=False, allow_unicode=True)
        )

        return sidecar_path
