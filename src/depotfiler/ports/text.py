"""Text extraction port - interface for turning documents into text."""

from abc import ABC, abstractmethod


class TextExtractorPort(ABC):
    """Interface for document text extraction."""

    @abstractmethod
    def extract_text(self, data: bytes) -> str:
        """Extract the plain text of a document.

        May raise on malformed input; the text is untrusted.
        """
        pass
