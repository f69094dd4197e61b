"""Metadata extraction from the plain text of brokerage statements."""

import logging
import re

from . import categories
from .dates import MIN_YEAR, find_document_date, is_plausible_date
from .identifiers import ISIN_PATTERN, compact_iban, find_isins, is_valid_iban
from .models import BALANCE_LABEL, DocumentRecord

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 1_000_000
MAX_LABEL_LENGTH = 500

ACCOUNT_LABEL = "Konto"
PORTFOLIO_LABEL = "Depot"
TAX_LABEL = "Steuer"

NOISE_MARKERS = ("Umsatzsteuer", "USt-Id", "VAT")
SUMMARY_PHRASES = (
    ("cash zinsen", "Guthaben_Zinsen"),
    ("geldmarkt dividende", "Geldmarkt_Dividende"),
)

_AMOUNT = re.compile(
    r"\d+(?:[.,]\d{3})*[.,]\d{2}\s*(?:EUR|USD|€|\$)|(?:EUR|USD|€|\$)\s*\d",
    re.IGNORECASE,
)
_TOTAL_LINE = re.compile(r"gesamt|^(?:total|summe|betrag)\b", re.IGNORECASE)
_SHARE_WORDS = ("stk.", "anzahl")
_POSITION_LINE = re.compile(
    r"^[ \t]*POSITION\b[^\n]*\n(?:[ \t]*\n)*[ \t]*(\S[^\n]*)", re.MULTILINE
)
_TRANSFER_LINE = re.compile(r"Depottransfer eingegangen[ \t:]*([^\n]*)", re.IGNORECASE)
_IBAN_LABEL = re.compile(r"\bIBAN\b\s*:?\s*([A-Z]{2}\d{2}[A-Z0-9 ]{10,45})")
_YEAR = re.compile(r"\b(\d{4})\b")


def is_label_candidate(line: str) -> bool:
    """Check whether a line can serve as an asset description."""
    line = line.strip()
    if len(line) > MAX_LABEL_LENGTH:
        return False
    lower = line.lower()
    if len(line) <= 3 or line.isdigit():
        return False
    if "ISIN" in line or ISIN_PATTERN.search(line):
        return False
    if _TOTAL_LINE.search(line) or _AMOUNT.search(line):
        return False
    if any(word in lower for word in _SHARE_WORDS):
        return False
    return not (
        line.startswith("POSITION")
        or lower.startswith("datum")
        or lower.startswith("date")
    )


def find_identifier(lines: list[str]) -> tuple[str | None, str | None]:
    """Find the first valid ISIN and a label describing it.

    Returns (identifier, label); both None if no valid ISIN exists.
    """
    for i, line in enumerate(lines):
        if any(marker in line for marker in NOISE_MARKERS):
            continue
        isins = find_isins(line)
        if not isins:
            continue
        isin = isins[0]

        label = None
        if line.strip() != isin:
            # "ISIN: ..." style: the name usually follows
            for after in lines[i + 1 : i + 3]:
                if is_label_candidate(after):
                    label = after.strip()
                    break
        if label is None:
            for before in reversed(lines[max(0, i - 3) : i]):
                if is_label_candidate(before):
                    label = before.strip()
                    break

        return isin, label or isin
    return None, None


def find_summary(lines: list[str]) -> tuple[str, str] | None:
    """Detect consolidated interest/money-market dividend statements.

    Returns (category, label) or None.
    """
    found = []
    for phrase, label in SUMMARY_PHRASES:
        if any(phrase in line.lower() for line in lines):
            found.append(label)
    if not found:
        return None
    if len(found) == 2:
        category = categories.INTEREST_AND_DIVIDEND
    elif found[0] == SUMMARY_PHRASES[0][1]:
        category = categories.INTEREST
    else:
        category = categories.DIVIDEND
    return category, "_und_".join(found)


def find_position_label(text: str) -> str | None:
    m = _POSITION_LINE.search(text)
    return m.group(1).strip() if m else None


def find_transfer_label(text: str) -> str | None:
    # The first match is often the bare heading; take the first with a name
    for m in _TRANSFER_LINE.finditer(text):
        if m.group(1).strip():
            return m.group(1).strip()
    return None


def find_iban(text: str) -> str | None:
    """Return the first labelled IBAN that passes mod-97."""
    for m in _IBAN_LABEL.finditer(text):
        # Grow the candidate group by group; trailing words (e.g. "BIC") never validate
        candidate = ""
        for part in m.group(1).split():
            candidate += part
            if len(candidate) > 34:
                break
            if len(candidate) >= 15 and is_valid_iban(candidate):
                return compact_iban(candidate)
    return None


def find_reporting_year(text: str, document_year: int) -> int:
    """Pick the year an annual report covers."""
    years = {
        int(y) for y in _YEAR.findall(text) if MIN_YEAR <= int(y) <= document_year
    }
    previous = document_year - 1
    if previous in years:
        return previous
    if years:
        return max(years)
    return previous if previous >= MIN_YEAR else document_year


def parse(text: str) -> DocumentRecord | None:
    """Extract a DocumentRecord from statement text.

    Returns None for oversized input, when no date can be found, or when the
    date is implausible. Everything else falls back to sentinel values.
    """
    if len(text) > MAX_TEXT_LENGTH:
        logger.warning(f"Rejecting text of {len(text)} characters")
        return None

    doc_date = find_document_date(text)
    if doc_date is None:
        logger.debug("No date found")
        return None
    if not is_plausible_date(doc_date):
        logger.warning(f"Rejecting implausible date {doc_date.isoformat()}")
        return None

    category = categories.correct_sale(categories.classify(text), text)

    lines = text.splitlines()
    identifier, label = find_identifier(lines)

    if identifier is None and label is None:
        summary = find_summary(lines)
        if summary:
            category, label = summary

    if label is None:
        label = find_position_label(text) or BALANCE_LABEL

    if category == categories.TRANSFER:
        label = find_transfer_label(text) or label
    elif category == categories.ACCOUNT_STATEMENT:
        identifier = None
        label = find_iban(text) or ACCOUNT_LABEL
    elif category in categories.ANNUAL_REPORTS:
        label = str(find_reporting_year(text, doc_date.year))
    elif category == categories.PORTFOLIO_STATEMENT:
        identifier = None
        label = PORTFOLIO_LABEL
    elif category == categories.TAX_OPTIMIZATION:
        label = TAX_LABEL

    label = label.strip()
    if not label or len(label) > MAX_LABEL_LENGTH:
        label = BALANCE_LABEL

    return DocumentRecord(
        date=doc_date, category=category, identifier=identifier, asset_label=label
    )
