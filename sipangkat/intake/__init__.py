"""File intake for chat attachments.

Responsibilities:
    - Size ceiling enforcement with user-visible notices
    - File type checks mirroring the browser picker
    - PDF readability checks with pypdf
    - Base64 encoding into Attachments

Never touches conversation history.
"""

from sipangkat.intake.file_intake import (
    MAX_FILE_SIZE,
    FileTooLarge,
    IncomingFile,
    IntakeError,
    IntakeResult,
    UnsupportedFileType,
    accept_files,
    encode_file,
)

__all__ = [
    "MAX_FILE_SIZE",
    "FileTooLarge",
    "IncomingFile",
    "IntakeError",
    "IntakeResult",
    "UnsupportedFileType",
    "accept_files",
    "encode_file",
]
