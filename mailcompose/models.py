"""Typed containers shared across the pipeline."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .errors import IngestionError

# Office types absent from older built-in mimetypes tables.
KNOWN_EXTENSION_TYPES = {
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def guess_content_type(filename: str) -> str:
    known = KNOWN_EXTENSION_TYPES.get(Path(filename).suffix.lower())
    if known:
        return known
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or ""


@dataclass
class CandidateFile:
    """A file offered for ingestion, before any checks ran."""

    name: str
    content_type: str
    size: int
    path: Optional[Path] = None
    content: Optional[bytes] = None

    @classmethod
    def from_path(cls, path: Path | str, content_type: str | None = None) -> "CandidateFile":
        path = Path(path)
        return cls(
            name=path.name,
            content_type=content_type or guess_content_type(path.name),
            size=path.stat().st_size,
            path=path,
        )

    @classmethod
    def from_bytes(cls, name: str, content: bytes, content_type: str) -> "CandidateFile":
        return cls(name=name, content_type=content_type, size=len(content), content=content)


@dataclass
class EncodedFile:
    """An accepted attachment; `data` is a base64 data URI of exactly `size` bytes."""

    name: str
    size: int
    mime_type: str
    data: str
    original_name: str


@dataclass
class InlineImage:
    """An image referenced from the HTML body as cid:img@<filename>."""

    filename: str
    data: str
    original_name: str


@dataclass
class Rejection:
    """User-facing report for one refused file."""

    filename: str
    title: str
    description: str
    error: IngestionError

    @classmethod
    def from_error(cls, error: IngestionError) -> "Rejection":
        return cls(
            filename=error.filename,
            title=error.title,
            description=error.description,
            error=error,
        )


class EmailMode(str, Enum):
    TEXT = "text"
    HTML = "html"
    AUTO_GENERATE = "auto-generate"


@dataclass
class EmailFields:
    """Fields shared by every mode."""

    source: str
    from_address: str
    subject: str
    to: str
    cc: str = ""
    bcc: str = ""
    template_id: int = 1


@dataclass
class TextEmail:
    fields: EmailFields
    text_body: str = ""
    html_body: str = ""
    mode: EmailMode = field(default=EmailMode.TEXT, init=False)


@dataclass
class HtmlEmail:
    fields: EmailFields
    html_body: str = ""
    mode: EmailMode = field(default=EmailMode.HTML, init=False)


@dataclass
class AutoGenerateEmail:
    fields: EmailFields
    prompt: str = ""
    mode: EmailMode = field(default=EmailMode.AUTO_GENERATE, init=False)


EmailRequest = Union[TextEmail, HtmlEmail, AutoGenerateEmail]
