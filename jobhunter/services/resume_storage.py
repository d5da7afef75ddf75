"""Resume PDFs on local disk plus text extraction."""
import io
import logging
from pathlib import Path

import pdfplumber

from jobhunter.config import settings
from jobhunter.core.security import generate_id

logger = logging.getLogger(__name__)


class InvalidResumeFile(ValueError):
    pass


class ResumeFileTooLarge(ValueError):
    pass


def validate_pdf(content: bytes) -> None:
    max_bytes = settings.max_resume_upload_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise ResumeFileTooLarge(f"File too large. Max allowed is {settings.max_resume_upload_mb}MB.")
    # Magic bytes check rejects renamed non-PDF uploads.
    if not content.startswith(b"%PDF"):
        raise InvalidResumeFile("Invalid PDF file content.")


def _root() -> Path:
    return Path(settings.resume_storage_dir)


def save(user_id: str, filename: str, content: bytes) -> str:
    """Write the file under <storage>/<user_id>/ and return the relative storage path."""
    suffix = Path(filename).suffix.lower() or ".pdf"
    rel = f"{user_id}/{generate_id()}{suffix}"
    path = _root() / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    logger.info("Stored resume file %s (%d bytes)", rel, len(content))
    return rel


def delete(storage_path: str | None) -> bool:
    if not storage_path:
        return False
    path = (_root() / storage_path).resolve()
    if _root().resolve() not in path.parents:
        logger.warning("Refusing to delete outside storage root: %s", storage_path)
        return False
    if not path.exists():
        return False
    path.unlink()
    return True


def extract_text(content: bytes) -> str:
    """Plain text of every page, in order."""
    with pdfplumber.open(io.BytesIO(content)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages).strip()
