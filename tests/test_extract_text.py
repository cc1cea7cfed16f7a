import io

import pytest
from docx import Document

from errors import ExtractionError, UnsupportedFileType
from services.documents import DocumentStore
from services.extract_text import check_extension, extract_text


def docx_bytes(*paragraphs):
    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def test_plain_text_and_markdown():
    assert extract_text("Héllo world".encode("utf-8"), "notes.txt") == "Héllo world"
    assert extract_text(b"# Title\n\nBody", "README.MD") == "# Title\n\nBody"


def test_docx():
    text = extract_text(docx_bytes("First paragraph.", "Second paragraph."), "lecture.docx")
    assert text == "First paragraph.\nSecond paragraph."


@pytest.mark.parametrize("name", ["slides.pptx", "legacy.doc", "noext"])
def test_unsupported_extension(name):
    with pytest.raises(UnsupportedFileType, match="Supported types are: .pdf, .docx, .txt, .md"):
        check_extension(name)


def test_empty_document():
    with pytest.raises(ExtractionError, match="No text content"):
        extract_text(b"  \n ", "empty.txt")


def test_corrupt_pdf():
    with pytest.raises(ExtractionError, match="Failed to extract text"):
        extract_text(b"not really a pdf", "broken.pdf")


def test_document_store_round_trip(session_factory, tmp_path):
    docs = DocumentStore(session_factory, str(tmp_path / "uploads"))
    doc = docs.save_upload("my notes.txt", b"Cells are the unit of life.")

    assert doc.filename == "my_notes.txt"
    assert docs.get(doc.id).content == "Cells are the unit of life."
    path, name, mimetype = docs.original_file(doc.id)
    assert name == "my_notes.txt"
    assert mimetype == "text/plain"
    with open(path, "rb") as f:
        assert f.read() == b"Cells are the unit of life."


def test_failed_extraction_leaves_no_file(session_factory, tmp_path):
    uploads = tmp_path / "uploads"
    docs = DocumentStore(session_factory, str(uploads))

    with pytest.raises(ExtractionError):
        docs.save_upload("blank.md", b"")
    assert list(uploads.iterdir()) == []
