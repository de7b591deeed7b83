"""
PDF Parser - extract text from PDF bytes
"""
import re
from dataclasses import dataclass

import fitz  # PyMuPDF

from careerprep.core.exceptions import ValidationError


@dataclass
class ParsedPDF:
    text: str
    page_count: int


class PDFParser:
    """PDF file parser"""

    def extract_text(self, content: bytes) -> ParsedPDF:
        """
        Extract text from a PDF held in memory

        Args:
            content: raw PDF bytes

        Returns:
            ParsedPDF with cleaned text and page count
        """
        try:
            doc = fitz.open(stream=content, filetype="pdf")
        except Exception as e:
            raise ValidationError(f"Failed to parse PDF: {e}")

        try:
            pages = [page.get_text() for page in doc]
            page_count = doc.page_count
        finally:
            doc.close()

        return ParsedPDF(text=self._clean_text("\n".join(pages)), page_count=page_count)

    def _clean_text(self, text: str) -> str:
        """Normalize whitespace, keeping line structure"""
        # collapse runs of spaces/tabs inside a line
        text = re.sub(r'[ \t\f\v]+', ' ', text)

        # strip each line
        text = "\n".join(line.strip() for line in text.splitlines())

        # at most one blank line between blocks
        text = re.sub(r'\n{3,}', '\n\n', text)

        return text.strip()
