"""Extract plain text from resume / JD files, dispatching on the file extension.

Supported: .txt, .md (read as UTF-8), .pdf (PyPDF2), .docx (python-docx).
"""
import io
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from docx import Document
from loguru import logger
from PyPDF2 import PdfReader

SUPPORTED_EXTENSIONS = (".txt", ".md", ".pdf", ".docx")

# Below this, a PDF is most likely scanned images without a text layer
MIN_PDF_CHARS = 50


class FileParseError(Exception):
    """Unsupported format, unreadable file, or no extractable text."""
    pass


@dataclass
class ParsedFile:
    text: str
    format: str
    char_count: int


def _clean(text: str) -> str:
    text = text.replace("\f", "\n").replace("\r\n", "\n")
    text = re.sub(r"\n{4,}", "\n\n\n", text)
    return text.strip()


def _parse_pdf(source) -> str:
    reader = PdfReader(source)
    pages = []
    for page in reader.pages:
        page_text = page.extract_text()
        if page_text:
            pages.append(page_text)
    text = _clean("\n".join(pages))
    if len(text) < MIN_PDF_CHARS:
        raise FileParseError(
            "PDF text extraction returned very little text. The PDF might be "
            "image-based (scanned). Try converting it to text first."
        )
    return text


def _parse_docx(source) -> str:
    document = Document(source)
    return _clean("\n".join(p.text for p in document.paragraphs))


def _unsupported(ext: str) -> FileParseError:
    return FileParseError(
        f"Unsupported file format: {ext or '(none)'}. Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
    )


def parse_file(path: Union[str, Path]) -> ParsedFile:
    """Read ``path`` and return its text.

    Raises:
        FileParseError: Unsupported extension, undecodable content, or no text.
    """
    path = Path(path)
    ext = path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise _unsupported(ext)
    return parse_file_bytes(path.read_bytes(), path.name)


def parse_file_bytes(content: bytes, filename: str) -> ParsedFile:
    """Same as ``parse_file`` for an in-memory upload; ``filename`` picks the format."""
    ext = Path(filename).suffix.lower()
    logger.debug(f"📑 Parsing {filename} ({len(content)} bytes)")

    if ext in (".txt", ".md"):
        try:
            text = content.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            raise FileParseError(f"{filename} is not valid UTF-8 text: {e}") from e
    elif ext == ".pdf":
        try:
            text = _parse_pdf(io.BytesIO(content))
        except FileParseError:
            raise
        except Exception as e:
            raise FileParseError(f"PDF parsing failed: {e}") from e
    elif ext == ".docx":
        try:
            text = _parse_docx(io.BytesIO(content))
        except Exception as e:
            raise FileParseError(f"DOCX parsing failed: {e}") from e
    else:
        raise _unsupported(ext)

    if not text:
        raise FileParseError(f"No text could be extracted from {filename}")

    logger.info(f"✅ Extracted {len(text)} chars from {filename}")
    return ParsedFile(text=text, format=ext.lstrip("."), char_count=len(text))
