"""Shared test fixtures."""

from datetime import date
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from depotfiler.domain.models import DocumentRecord
from depotfiler.ports.metadata import MetadataPort
from depotfiler.ports.storage import StoragePort
from depotfiler.ports.text import TextExtractorPort

SAVINGS_PLAN_TEXT = """\
TRADE REPUBLIC BANK GMBH BRUNNENSTRASSE 19-21 10119 BERLIN
DATUM 02.07.2025
WERTPAPIERABRECHNUNG SPARPLAN
POSITION ANZAHL DURCHSCHNITTSKURS BETRAG
MSCI World USD (Dist)
ISIN: IE00BK1PV551
0,812345 Stk. 30,777 EUR 25,00 EUR
GESAMT 25,00 EUR
Umsatzsteuer-ID: DE307510626
"""


@pytest.fixture
def sample_record() -> DocumentRecord:
    """Sample record for testing."""
    return DocumentRecord(
        date=date(2025, 7, 2),
        category="Kauf_Sparplan",
        identifier="IE00B4L5Y983",
        asset_label="iShares Core MSCI World (Acc)",
    )


@pytest.fixture
def mock_text_extractor() -> MagicMock:
    """Mock text extraction port."""
    mock = MagicMock(spec=TextExtractorPort)
    mock.extract_text.return_value = SAVINGS_PLAN_TEXT
    return mock


@pytest.fixture
def mock_storage() -> MagicMock:
    """Mock storage port."""
    mock = MagicMock(spec=StoragePort)
    mock.rename.side_effect = lambda path, name: path.with_name(name)
    mock.plan.side_effect = lambda path, name: path.with_name(name)
    return mock


@pytest.fixture
def mock_metadata() -> MagicMock:
    """Mock metadata port."""
    mock = MagicMock(spec=MetadataPort)
    mock.write_sidecar.side_effect = lambda path, record: path.with_suffix(".yaml")
    return mock


@pytest.fixture
def statement_pdf(tmp_path: Path) -> Path:
    """A stand-in PDF; text comes from the mocked extractor."""
    path = tmp_path / "pb20250702.pdf"
    path.write_bytes(b"%PDF-1.4 test content")
    return path


@pytest.fixture
def savings_plan_text() -> str:
    return SAVINGS_PLAN_TEXT
