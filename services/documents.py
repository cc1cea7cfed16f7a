# services/documents.py
import logging
import os
import uuid

from werkzeug.utils import secure_filename

from errors import DocumentNotFound, ExtractionError
from models import Document
from services.extract_text import MIME_TYPES, check_extension, extract_text

logger = logging.getLogger(__name__)


class DocumentStore:
    """Uploaded files on disk plus their extracted text in the database."""

    def __init__(self, session_factory, uploads_dir: str):
        self._session_factory = session_factory
        self.uploads_dir = uploads_dir
        os.makedirs(uploads_dir, exist_ok=True)

    def save_upload(self, filename: str, data: bytes) -> Document:
        ext = check_extension(filename)
        doc_id = str(uuid.uuid4())
        stored_name = f"{doc_id}{ext}"
        path = os.path.join(self.uploads_dir, stored_name)
        with open(path, 'wb') as f:
            f.write(data)

        try:
            text = extract_text(data, filename)
        except ExtractionError:
            # nothing usable, do not keep the file around
            os.remove(path)
            raise

        doc = Document(
            id=doc_id,
            filename=secure_filename(filename) or f"upload{ext}",
            stored_name=stored_name,
            size_kb=max(1, len(data) // 1024),
            content=text,
        )
        with self._session_factory() as s:
            s.add(doc)
            s.commit()
        logger.info(f"Uploaded document {doc.id} ({doc.filename}, {doc.size_kb} KB)")
        return doc

    def get(self, document_id: str) -> Document:
        with self._session_factory() as s:
            doc = s.get(Document, document_id)
        if doc is None:
            raise DocumentNotFound(document_id)
        return doc

    def original_file(self, document_id: str):
        """(path, download name, mime type) of the stored upload."""
        doc = self.get(document_id)
        path = os.path.join(self.uploads_dir, doc.stored_name)
        if not os.path.isfile(path):
            raise DocumentNotFound(document_id)
        ext = os.path.splitext(doc.stored_name)[1].lower()
        return path, doc.filename, MIME_TYPES.get(ext, 'application/octet-stream')
