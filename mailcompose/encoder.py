"""Binary-to-text encoding of candidate files."""

from __future__ import annotations

import base64
import logging

from .errors import EncodingError
from .models import CandidateFile

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def read_candidate(candidate: CandidateFile) -> bytes:
    """Return the candidate's raw bytes, raising EncodingError on any read failure."""
    if candidate.content is not None:
        content = candidate.content
    elif candidate.path is not None:
        try:
            content = candidate.path.read_bytes()
        except OSError as exc:
            raise EncodingError(candidate.name, exc.strerror or str(exc)) from exc
    else:
        raise EncodingError(candidate.name, "no content to read")

    if len(content) != candidate.size:
        raise EncodingError(
            candidate.name,
            f"read {len(content)} bytes but {candidate.size} were declared",
        )
    return content


def encode_file(candidate: CandidateFile) -> str:
    """Encode a candidate as a data URI: data:<mime>;base64,<payload>."""
    content = read_candidate(candidate)
    mime_type = candidate.content_type or DEFAULT_MIME_TYPE
    encoded = base64.b64encode(content).decode("ascii")
    logger.debug("Encoded %s (%s bytes)", candidate.name, len(content))
    return f"data:{mime_type};base64,{encoded}"


def decode_data_uri(data: str) -> bytes:
    """Inverse of encode_file; a bare base64 string is accepted too."""
    _, sep, payload = data.partition(";base64,")
    return base64.b64decode(payload if sep else data, validate=True)
