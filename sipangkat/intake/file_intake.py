"""File intake for chat attachments.

Validates uploaded files and encodes accepted ones as base64 attachments.
Rejected files produce a user-visible notice; the rest of the batch is
still accepted.
"""

import base64
import io
import logging
import mimetypes
from collections.abc import Iterable
from pathlib import PurePath

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from sipangkat.models.schemas import Attachment

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 20 * 1024 * 1024  # 20MB
PDF_MAGIC_BYTES = b"%PDF"
PDF_MIME_TYPE = "application/pdf"
GENERIC_MIME_TYPE = "application/octet-stream"
ALLOWED_EXTENSIONS = frozenset({".pdf", ".doc", ".docx", ".txt"})
ALLOWED_MIME_TYPES = frozenset(
    {
        PDF_MIME_TYPE,
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
    }
)


class IncomingFile(BaseModel):
    """A file received from the picker, before validation.

    Attributes:
        name: Original filename.
        mime_type: MIME type reported by the client, may be empty.
        content: Raw file bytes.
    """

    name: str
    mime_type: str = ""
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class IntakeResult(BaseModel):
    """Outcome of one intake batch."""

    attachments: list[Attachment] = Field(default_factory=list)
    notices: list[str] = Field(default_factory=list)


class IntakeError(Exception):
    """Raised when a file cannot become an attachment.

    Attributes:
        notice: User-visible text for the rejection.
    """

    def __init__(self, notice: str) -> None:
        self.notice = notice
        super().__init__(notice)


class FileTooLarge(IntakeError):
    """Raised when a file exceeds the size ceiling."""


class UnsupportedFileType(IntakeError):
    """Raised when a file type is not offered by the picker."""


def _limit_mb(max_size: int) -> int:
    return max_size // (1024 * 1024)


def resolve_mime_type(file: IncomingFile) -> str:
    """Return the reported MIME type, guessing from the filename if absent.

    Browsers report "application/octet-stream" for types they do not know,
    which is treated the same as no type at all.
    """
    if file.mime_type and file.mime_type != GENERIC_MIME_TYPE:
        return file.mime_type
    guessed, _ = mimetypes.guess_type(file.name)
    return guessed or GENERIC_MIME_TYPE


def _validate_size(file: IncomingFile, max_size: int) -> None:
    if file.size > max_size:
        raise FileTooLarge(f"File {file.name} terlalu besar (Max {_limit_mb(max_size)}MB)")


def _validate_type(file: IncomingFile, mime_type: str) -> None:
    extension = PurePath(file.name).suffix.lower()
    if mime_type.startswith("image/") or mime_type in ALLOWED_MIME_TYPES:
        return
    if extension in ALLOWED_EXTENSIONS:
        return
    raise UnsupportedFileType(
        f"File {file.name} tidak didukung. Gunakan PDF, dokumen Word, teks, atau gambar."
    )


def _validate_pdf(file: IncomingFile) -> int:
    """Check that a PDF can be opened.

    Returns:
        Number of pages in the document.

    Raises:
        IntakeError: If the file is not a readable PDF.
    """
    failure = IntakeError(f"Gagal memproses file {file.name}.")

    if not file.content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        logger.warning(f"{file.name} does not start with a PDF header")
        raise failure

    try:
        reader = PdfReader(io.BytesIO(file.content))
        pages = len(reader.pages)
    except PdfReadError as e:
        logger.warning(f"Corrupt PDF {file.name}: {e}")
        raise failure from e
    except Exception as e:
        logger.warning(f"Failed to read PDF {file.name}: {e}")
        raise failure from e

    if pages == 0:
        raise failure
    return pages


def encode_file(file: IncomingFile, max_size: int = MAX_FILE_SIZE) -> Attachment:
    """Validate one file and encode it as an attachment.

    Args:
        file: The incoming file.
        max_size: Size ceiling in bytes.

    Returns:
        Attachment with base64 content.

    Raises:
        FileTooLarge: If the file exceeds ``max_size``.
        UnsupportedFileType: If the file type is not accepted.
        IntakeError: If a PDF cannot be read.
    """
    _validate_size(file, max_size)

    mime_type = resolve_mime_type(file)
    _validate_type(file, mime_type)

    if mime_type == PDF_MIME_TYPE or PurePath(file.name).suffix.lower() == ".pdf":
        pages = _validate_pdf(file)
        logger.info(f"Accepted PDF {file.name} ({pages} pages)")

    return Attachment(
        name=file.name,
        mime_type=mime_type,
        data=base64.b64encode(file.content).decode("ascii"),
    )


def accept_files(files: Iterable[IncomingFile], max_size: int = MAX_FILE_SIZE) -> IntakeResult:
    """Turn a batch of files into attachments.

    Args:
        files: Files chosen in the picker.
        max_size: Size ceiling in bytes.

    Returns:
        Accepted attachments in input order, and notices for rejected files.
    """
    result = IntakeResult()
    for file in files:
        try:
            result.attachments.append(encode_file(file, max_size=max_size))
        except IntakeError as e:
            logger.warning(f"Rejected upload {file.name}: {e.notice}")
            result.notices.append(e.notice)
    return result
