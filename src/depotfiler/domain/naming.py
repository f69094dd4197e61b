"""Target filename construction.

Produces ``YYYY_MM_DD_<Category>[_<ISIN>]_<Label>.<ext>`` where category and
label contain only ``[A-Za-z0-9_]``.
"""

import re
import unicodedata

from .models import BALANCE_LABEL, DocumentRecord

SEPARATOR = "_"
DEFAULT_EXTENSION = "pdf"
INVALID_NAME = "Invalid_Asset_Name"
MAX_INPUT_LENGTH = 500
MAX_LABEL_LENGTH = 50

RENAMED_PATTERN = re.compile(
    r"^\d{4}_\d{2}_\d{2}_[A-Za-z_]+(_[A-Z]{2}[A-Z0-9]{9}\d)?_.+\.pdf$"
)

# Directional marks and embedding/override/isolate controls
BIDI_CONTROLS = frozenset(
    "\u200e\u200f\u061c\u202a\u202b\u202c\u202d\u202e\u2066\u2067\u2068\u2069"
)
_GERMAN_FOLD = str.maketrans(
    {"ä": "ae", "ö": "oe", "ü": "ue", "Ä": "Ae", "Ö": "Oe", "Ü": "Ue", "ß": "ss"}
)
_UNSAFE = re.compile(r"[^A-Za-z0-9_]+")
_SEPARATOR_RUN = re.compile(r"_{2,}")
_IDENTIFIER = re.compile(r"[A-Za-z0-9]{12}")
_EXTENSION = re.compile(r"[A-Za-z0-9]{1,10}")


def _strip_controls(name: str) -> str:
    return "".join(
        ch
        for ch in name
        if ch not in BIDI_CONTROLS and unicodedata.category(ch) not in ("Cc", "Cf")
    )


def _fold_to_ascii(name: str) -> str:
    name = unicodedata.normalize("NFKD", name.translate(_GERMAN_FOLD))
    return "".join(ch for ch in name if not unicodedata.combining(ch))


def sanitize_component(name: str) -> str:
    """Reduce a string to a safe filename component.

    Control and bidirectional formatting characters are removed outright,
    everything else outside ``[A-Za-z0-9_]`` becomes a single underscore.
    The result never starts or ends with an underscore and never contains
    two in a row. Oversized input yields ``INVALID_NAME``.
    """
    if len(name) > MAX_INPUT_LENGTH:
        return INVALID_NAME
    name = _fold_to_ascii(_strip_controls(name))
    name = _UNSAFE.sub(SEPARATOR, name)
    name = _SEPARATOR_RUN.sub(SEPARATOR, name).strip(SEPARATOR)
    # Folding can expand (ß -> ss, ligatures); keep the result stable
    if len(name) > MAX_INPUT_LENGTH:
        return INVALID_NAME
    return name


def truncate_label(label: str, max_length: int = MAX_LABEL_LENGTH) -> str:
    return label[:max_length].rstrip(SEPARATOR)


def valid_identifier(identifier: str | None) -> str | None:
    """Return identifier if it is 12 ASCII alphanumerics, else None."""
    if identifier and _IDENTIFIER.fullmatch(identifier):
        return identifier
    return None


def file_extension(original_filename: str) -> str:
    """Extension of the original name if safe, lower-cased; else ``pdf``."""
    _, dot, ext = original_filename.rpartition(".")
    if dot and _EXTENSION.fullmatch(ext):
        return ext.lower()
    return DEFAULT_EXTENSION


def build_filename(record: DocumentRecord, original_filename: str) -> str:
    """Build the target filename for a record."""
    d = record.date
    date_part = f"{d.year:04d}_{d.month:02d}_{d.day:02d}"
    category = sanitize_component(record.category.replace(" ", SEPARATOR))
    identifier = valid_identifier(record.identifier)
    label = truncate_label(sanitize_component(record.asset_label))

    if identifier and label == identifier:
        label = ""
    elif not identifier and not label:
        # Every name keeps a label segment
        label = BALANCE_LABEL

    parts = (date_part, category, identifier, label)
    stem = SEPARATOR.join(part for part in parts if part)
    return f"{stem}.{file_extension(original_filename)}"


def is_already_renamed(filename: str) -> bool:
    """Check whether a filename already follows the target scheme."""
    return bool(RENAMED_PATTERN.match(filename))
