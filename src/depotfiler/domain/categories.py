"""Keyword-based document classification."""

import re

from .models import UNKNOWN_CATEGORY

PURCHASE = "Kauf"
SALE = "Verkauf"
TRANSFER = "Depottransfer"
ACCOUNT_STATEMENT = "Kontoauszug"
PORTFOLIO_STATEMENT = "Depotauszug"
TAX_OPTIMIZATION = "Steuerliche_Optimierung"
INTEREST = "Zinsen"
DIVIDEND = "Dividende"
INTEREST_AND_DIVIDEND = "Zinsen_und_Dividende"
COST_INFORMATION = "Kosteninformation"
EX_POST_COST_INFORMATION = "Ex_Post_Kosteninformation"
ANNUAL_TAX_CERTIFICATE = "Jahressteuerbescheinigung"
TAX_REPORT = "Steuerreport"

# Labelled by reporting year instead of by asset
ANNUAL_REPORTS = frozenset(
    {COST_INFORMATION, EX_POST_COST_INFORMATION, ANNUAL_TAX_CERTIFICATE, TAX_REPORT}
)

# First match wins, so more specific keywords come first
KEYWORDS: tuple[tuple[str, str], ...] = (
    ("WERTPAPIERABRECHNUNG SPARPLAN", "Kauf_Sparplan"),
    ("WERTPAPIERABRECHNUNG SAVEBACK", "Kauf_Saveback"),
    ("WERTPAPIERABRECHNUNG ROUND UP", "Kauf_Roundup"),
    ("WERTPAPIERABRECHNUNG", PURCHASE),
    ("EX-POST-KOSTENINFORMATION", EX_POST_COST_INFORMATION),
    ("EX-POST KOSTENINFORMATION", EX_POST_COST_INFORMATION),
    ("EX-POST COST INFORMATION", EX_POST_COST_INFORMATION),
    ("KOSTENINFORMATION", COST_INFORMATION),
    ("COST INFORMATION", COST_INFORMATION),
    ("JAHRESSTEUERBESCHEINIGUNG", ANNUAL_TAX_CERTIFICATE),
    ("ANNUAL TAX CERTIFICATE", ANNUAL_TAX_CERTIFICATE),
    ("STEUERREPORT", TAX_REPORT),
    ("TAX REPORT", TAX_REPORT),
    ("KONTOAUSZUG", ACCOUNT_STATEMENT),
    ("SECURITIES ACCOUNT STATEMENT", PORTFOLIO_STATEMENT),
    ("ACCOUNT STATEMENT", ACCOUNT_STATEMENT),
    ("DIVIDENDE", DIVIDEND),
    ("ZINSEN", INTEREST),
    ("ZINSZAHLUNG", "Zinszahlung"),
    ("Interest Payout", INTEREST),
    ("Kapitalmaßnahme", "Kapitalmassnahme"),
    ("Corporate Action", "Kapitalmassnahme"),
    ("Savings Plan Execution", "Kauf_Sparplan"),
    ("Securities Settlement", PURCHASE),
    ("DEPOTTRANSFER EINGEGANGEN", TRANSFER),
    ("DEPOTTRANSFER", TRANSFER),
    ("DEPOTAUSZUG", PORTFOLIO_STATEMENT),
    ("STEUERLICHE OPTIMIERUNG", TAX_OPTIMIZATION),
)

SELL_PATTERN = re.compile(r"\b(?:SELL|VERKAUF)", re.IGNORECASE)


def classify(text: str) -> str:
    """Return the category of the first keyword found in text."""
    haystack = text.upper()
    for keyword, category in KEYWORDS:
        if keyword.upper() in haystack:
            return category
    return UNKNOWN_CATEGORY


def correct_sale(category: str, text: str) -> str:
    """Turn a generic purchase into a sale if the text names a sell side.

    "Securities Settlement" and "Wertpapierabrechnung" head both buys and sells.
    """
    if category == PURCHASE and SELL_PATTERN.search(text):
        return SALE
    return category
