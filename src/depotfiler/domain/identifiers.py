"""Checksum validation for security identifiers (ISIN) and IBANs."""

import re

ISIN_PATTERN = re.compile(r"\b([A-Z]{2}[A-Z0-9]{9}[0-9])\b")

_ISIN_FULL = re.compile(r"[A-Z]{2}[A-Z0-9]{9}[0-9]")
_IBAN_FULL = re.compile(r"[A-Z]{2}[0-9]{2}[A-Z0-9]{11,30}")


def _to_digits(code: str) -> str:
    """Map 0-9 to themselves and A-Z to 10-35, concatenated."""
    return "".join(str(int(ch, 36)) for ch in code)


def isin_check_digit(payload: str) -> int:
    """Compute the Luhn check digit for the first 11 characters of an ISIN."""
    total = 0
    # Doubling starts at the rightmost digit of the payload
    for i, ch in enumerate(reversed(_to_digits(payload))):
        d = int(ch)
        if i % 2 == 0:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return (10 - total % 10) % 10


def is_valid_isin(code: str) -> bool:
    """Check ISIN shape (2 letters, 9 alphanumerics, 1 digit) and checksum."""
    if not code or not _ISIN_FULL.fullmatch(code):
        return False
    return isin_check_digit(code[:11]) == int(code[11])


def find_isins(line: str) -> list[str]:
    """Return checksum-valid ISINs in a line, in order of appearance."""
    return [m.group(1) for m in ISIN_PATTERN.finditer(line) if is_valid_isin(m.group(1))]


def compact_iban(value: str) -> str:
    return re.sub(r"\s+", "", value).upper()


def is_valid_iban(value: str) -> bool:
    """Validate an IBAN via ISO 13616 mod-97.

    The first four characters move to the end, letters map to 10-35 and the
    resulting number must leave remainder 1.
    """
    iban = compact_iban(value)
    if not _IBAN_FULL.fullmatch(iban):
        return False
    rearranged = iban[4:] + iban[:4]
    return int(_to_digits(rearranged)) % 97 == 1
