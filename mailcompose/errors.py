"""Error kinds raised across the compose pipeline."""

from __future__ import annotations

from .utils import format_file_size


class MailComposeError(Exception):
    """Base class for every error raised by this package."""


class IngestionError(MailComposeError):
    """A single file was refused; the rest of the batch keeps going."""

    title = "File Upload Error"

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(self.description)

    @property
    def description(self) -> str:
        return f"Failed to process {self.filename}. Please try again."


class UnsupportedType(IngestionError):
    title = "Unsupported File Type"

    def __init__(self, filename: str, content_type: str) -> None:
        self.content_type = content_type
        super().__init__(filename)

    @property
    def description(self) -> str:
        return f"{self.filename} has an unsupported file type ({self.content_type or 'unknown'})."


class NotAnImage(UnsupportedType):
    title = "Invalid File Type"

    @property
    def description(self) -> str:
        return f"{self.filename} is not an image file."


class QuotaExceeded(IngestionError):
    title = "Total Size Limit Exceeded"

    def __init__(self, filename: str, remaining: int, cap: int) -> None:
        self.remaining = remaining
        self.cap = cap
        super().__init__(filename)

    @property
    def description(self) -> str:
        return (
            f"Cannot add {self.filename}. Total attachment size limit is "
            f"{format_file_size(self.cap)}. You have {format_file_size(self.remaining)} remaining."
        )


class EncodingError(IngestionError):
    def __init__(self, filename: str, reason: str) -> None:
        self.reason = reason
        super().__init__(filename)

    @property
    def description(self) -> str:
        return f"Failed to process {self.filename} ({self.reason}). Please try again."


class AssemblyInvariantViolation(MailComposeError):
    """The assembled payload broke a shape rule; always a programming error."""


class TransmissionError(MailComposeError):
    """Sending the payload to the delivery service failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)
