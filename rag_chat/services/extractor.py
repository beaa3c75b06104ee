from io import BytesIO
from pypdf import PdfReader


def extract_pdf_pages(file_bytes: bytes) -> list[dict]:
    """
    Returns [{"page": n, "text": ...}] with 1-based page numbers, the page
    numbers later shown next to each citation.
    """
    reader = PdfReader(BytesIO(file_bytes))
    return [
        {"page": i, "text": page.extract_text() or ""}
        for i, page in enumerate(reader.pages, start=1)
    ]
