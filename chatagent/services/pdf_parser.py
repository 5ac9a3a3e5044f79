"""Text extraction from uploaded files."""

import io
import logging

from pypdf import PdfReader

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = (".txt", ".md", ".text")


class UnsupportedFileType(ValueError):
    """Raised for uploads that are neither PDF nor plain text."""


def extract_text_from_pdf(pdf_content: bytes) -> str:
    """
    Extract text from a PDF file, one line per page.

    Args:
        pdf_content: PDF file content

    Returns:
        Extracted text

    Raises:
        ValueError: If the PDF cannot be parsed
    """
    try:
        reader = PdfReader(io.BytesIO(pdf_content))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        logger.error(f"Failed to parse PDF: {e}")
        raise ValueError(f"Failed to parse PDF: {str(e)}")

    logger.info(f"Extracted text from {len(pages)} PDF pages")
    return "".join(f"{text}\n" for text in pages)


def extract_text(filename: str, content: bytes) -> str:
    """
    Extract text from an upload based on its extension.

    Raises:
        UnsupportedFileType: For extensions other than PDF and text
        ValueError: If the content cannot be decoded
    """
    name = (filename or "").lower()

    if name.endswith(".pdf"):
        return extract_text_from_pdf(content)
    if name.endswith(TEXT_EXTENSIONS):
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError:
            raise ValueError("File must be UTF-8 encoded text")

    raise UnsupportedFileType(f"Unsupported file type: {filename}")
