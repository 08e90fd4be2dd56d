"""Tests for file-to-text extraction."""

import io
from pathlib import Path

import pytest
from docx import Document
from PyPDF2 import PdfWriter

from jobfit.infra.file_parser import FileParseError, parse_file, parse_file_bytes


class TestTextFiles:
    @pytest.mark.parametrize("suffix", [".txt", ".md", ".TXT"])
    def test_reads_text_as_is(self, tmp_path: Path, suffix: str) -> None:
        path = tmp_path / f"resume{suffix}"
        path.write_text("# Jane Doe\nBackend engineer", encoding="utf-8")

        parsed = parse_file(path)

        assert parsed.text == "# Jane Doe\nBackend engineer"
        assert parsed.format == suffix.lstrip(".").lower()
        assert parsed.char_count == len(parsed.text)

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "resume.rtf"
        path.write_text("x")

        with pytest.raises(FileParseError, match="Unsupported file format: .rtf"):
            parse_file(path)

    @pytest.mark.parametrize("suffix", [".txt", ".md"])
    def test_whitespace_only_file_rejected(self, tmp_path: Path, suffix: str) -> None:
        path = tmp_path / f"empty{suffix}"
        path.write_text("   \n", encoding="utf-8")

        with pytest.raises(FileParseError, match="No text could be extracted"):
            parse_file(path)

    def test_invalid_utf8_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "resume.txt"
        path.write_bytes(b"\xff\xfe\x00J\x00a\x00n\x00e")

        with pytest.raises(FileParseError, match="not valid UTF-8"):
            parse_file(path)

    def test_missing_file_raises_os_error(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            parse_file(tmp_path / "nope.txt")


class TestDocx:
    def test_extracts_paragraphs(self, tmp_path: Path) -> None:
        document = Document()
        document.add_paragraph("Jane Doe")
        document.add_paragraph("Built Kafka pipelines")
        path = tmp_path / "resume.docx"
        document.save(str(path))

        parsed = parse_file(path)

        assert parsed.format == "docx"
        assert parsed.text == "Jane Doe\nBuilt Kafka pipelines"

    def test_empty_docx_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "resume.docx"
        Document().save(str(path))

        with pytest.raises(FileParseError, match="No text could be extracted"):
            parse_file(path)

    def test_corrupt_docx(self) -> None:
        with pytest.raises(FileParseError, match="DOCX parsing failed"):
            parse_file_bytes(b"not a zip", "resume.docx")


class TestPdf:
    def test_blank_pdf_rejected_as_scanned(self) -> None:
        writer = PdfWriter()
        writer.add_blank_page(width=612, height=792)
        buffer = io.BytesIO()
        writer.write(buffer)

        with pytest.raises(FileParseError, match="very little text"):
            parse_file_bytes(buffer.getvalue(), "resume.pdf")

    def test_corrupt_pdf(self) -> None:
        with pytest.raises(FileParseError, match="PDF parsing failed"):
            parse_file_bytes(b"definitely not a pdf", "resume.pdf")


def test_parse_file_bytes_decodes_utf8() -> None:
    parsed = parse_file_bytes("Zoë, café".encode("utf-8"), "notes.md")

    assert parsed.text == "Zoë, café"
    assert parsed.format == "md"
