"""Rename brokerage statement PDFs after their date, type and security."""

__version__ = "0.1.0"
