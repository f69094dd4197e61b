"""Document date extraction.

Statements print their reference date in several shapes: numeric
(``31.07.2025``, ``2025-07-31``), textual (``31. Juli 2025``, ``31 Jul 2025``)
and as reporting periods (``01.07.2025 - 31.07.2025``). The cascade below
tries the most specific, keyword-anchored shapes first so that a period is
never mistaken for its start date. For periods the end date is taken, on the
assumption that a period on a statement is the reporting period ending at
the document date.
"""

import logging
import re
from collections.abc import Callable, Iterator
from datetime import date, datetime

logger = logging.getLogger(__name__)

MIN_YEAR = 2000
MAX_YEARS_AHEAD = 5

_UMLAUTS = str.maketrans({"ä": "ae", "ö": "oe", "ü": "ue", "ß": "ss"})

MONTHS = {
    "jan": 1, "januar": 1, "january": 1, "jaenner": 1,
    "feb": 2, "februar": 2, "february": 2,
    "mar": 3, "mrz": 3, "maer": 3, "maerz": 3, "marz": 3, "march": 3,
    "apr": 4, "april": 4,
    "mai": 5, "may": 5,
    "jun": 6, "juni": 6, "june": 6,
    "jul": 7, "juli": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "okt": 10, "oct": 10, "oktober": 10, "october": 10,
    "nov": 11, "november": 11,
    "dez": 12, "dec": 12, "dezember": 12, "december": 12,
}

_NUM = r"\d{2}\.\d{2}\.\d{4}|\d{4}-\d{2}-\d{2}"
_TEXT = r"(\d{1,2})\.?\s+([A-Za-zÄÖÜäöüß]{3,}\.?)\s+(\d{4})"
_SEP = r"\s*(?:-|–|bis|to)\s*"
_LABEL = r"\b(?:DATUM|DATE)\b\s*:?\s*"
_ALIASES = (
    r"\b(?:datum|date|erstellt\s+am|erstellt|created\s+on|created|"
    r"generated\s+on|generated|as\s+of|stand|per)\b\s*:?\s*"
)

LABELED_TEXT_RANGE = re.compile(_LABEL + _TEXT + _SEP + _TEXT, re.IGNORECASE)
LABELED_NUMERIC_RANGE = re.compile(
    _LABEL + rf"({_NUM}){_SEP}({_NUM})\b", re.IGNORECASE
)
LABELED_TEXT_DATE = re.compile(_LABEL + _TEXT, re.IGNORECASE)
LABELED_NUMERIC_DATE = re.compile(_ALIASES + rf"({_NUM})\b", re.IGNORECASE)
ANY_NUMERIC_DATE = re.compile(rf"\b({_NUM})\b(?:{_SEP}({_NUM})\b)?")
ANY_TEXT_DATE = re.compile(r"\b" + _TEXT, re.IGNORECASE)


def resolve_month(name: str) -> int | None:
    """Resolve a German or English month name or abbreviation to 1-12."""
    key = name.strip().rstrip(".").lower().translate(_UMLAUTS)
    return MONTHS.get(key)


def parse_numeric_date(value: str) -> date | None:
    """Parse ``dd.mm.yyyy`` or ``yyyy-mm-dd``; None if invalid."""
    fmt = "%d.%m.%Y" if "." in value else "%Y-%m-%d"
    try:
        return datetime.strptime(value.strip(), fmt).date()
    except ValueError:
        return None


def parse_textual_date(day: str, month: str, year: str) -> date | None:
    """Build a date from day, month name and year strings; None if invalid."""
    month_number = resolve_month(month)
    if month_number is None:
        return None
    try:
        return date(int(year), month_number, int(day))
    except ValueError:
        return None


def is_plausible_date(value: date, today: date | None = None) -> bool:
    """Year must lie in [2000, current year + 5]."""
    current = today or date.today()
    return MIN_YEAR <= value.year <= current.year + MAX_YEARS_AHEAD


def _labeled_text_range(text: str) -> Iterator[date | None]:
    for m in LABELED_TEXT_RANGE.finditer(text):
        yield parse_textual_date(m.group(4), m.group(5), m.group(6))


def _labeled_numeric_range(text: str) -> Iterator[date | None]:
    for m in LABELED_NUMERIC_RANGE.finditer(text):
        yield parse_numeric_date(m.group(2))


def _labeled_text_date(text: str) -> Iterator[date | None]:
    for m in LABELED_TEXT_DATE.finditer(text):
        yield parse_textual_date(m.group(1), m.group(2), m.group(3))


def _labeled_numeric_date(text: str) -> Iterator[date | None]:
    for m in LABELED_NUMERIC_DATE.finditer(text):
        yield parse_numeric_date(m.group(1))


def _any_numeric_date(text: str) -> Iterator[date | None]:
    for m in ANY_NUMERIC_DATE.finditer(text):
        # Range: the second component is the period end
        yield parse_numeric_date(m.group(2) or m.group(1))


def _any_text_date(text: str) -> Iterator[date | None]:
    for m in ANY_TEXT_DATE.finditer(text):
        yield parse_textual_date(m.group(1), m.group(2), m.group(3))


# Order matters: specific shapes before generic ones
CASCADE: tuple[tuple[str, Callable[[str], Iterator[date | None]]], ...] = (
    ("labeled textual range", _labeled_text_range),
    ("labeled numeric range", _labeled_numeric_range),
    ("labeled textual date", _labeled_text_date),
    ("labeled numeric date", _labeled_numeric_date),
    ("numeric date", _any_numeric_date),
    ("textual date", _any_text_date),
)


def find_document_date(text: str) -> date | None:
    """Run the date cascade and return the first date that parses.

    Candidates that fail to parse are skipped. The year bound is not checked
    here; see ``is_plausible_date``.
    """
    for step, candidates in CASCADE:
        for found in candidates(text):
            if found is not None:
                logger.debug(f"Date {found.isoformat()} from {step}")
                return found
    return None
