"""Map a compose request plus session files onto the delivery service payload."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

from .errors import AssemblyInvariantViolation
from .models import (
    AutoGenerateEmail,
    EmailFields,
    EmailRequest,
    EncodedFile,
    HtmlEmail,
    InlineImage,
    TextEmail,
)
from .template_synth import synthesize
from .utils import generate_txn_ref_no, parse_recipients

logger = logging.getLogger(__name__)


def assemble(
    request: EmailRequest,
    attachments: Sequence[EncodedFile] = (),
    images: Sequence[InlineImage] = (),
    txn_ref_no: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the outbound payload for one submission.

    File names are read at call time, so renames done after upload are honoured.
    """
    fields = request.fields
    message = _base_message(fields)
    additional_info: Dict[str, Any] = {
        "template_id": int(fields.template_id),
        "isText": isinstance(request, TextEmail),
    }

    if isinstance(request, TextEmail):
        message["html"] = request.html_body or ""
        message["text"] = request.text_body or ""
        if attachments or images:
            logger.warning(
                "Text email %r: %s attachment(s) and %s inline image(s) will not be sent",
                fields.subject,
                len(attachments),
                len(images),
            )
    elif isinstance(request, HtmlEmail):
        message["html"] = request.html_body or ""
        _add_files(additional_info, attachments, images)
    elif isinstance(request, AutoGenerateEmail):
        message["html"] = synthesize(request.prompt or "", images)
        _add_files(additional_info, attachments, images)
    else:
        logger.error("Cannot assemble unknown request type %s", type(request).__name__)
        raise AssemblyInvariantViolation(f"Unknown email request type: {type(request).__name__}")

    payload = {
        "txnRefNo": txn_ref_no or generate_txn_ref_no(),
        "source": fields.source,
        "payload": message,
        "additionalInfo": additional_info,
    }
    _check_invariants(request, payload)
    return payload


def _base_message(fields: EmailFields) -> Dict[str, Any]:
    message: Dict[str, Any] = {
        "from": fields.from_address,
        "subject": fields.subject,
        "to": parse_recipients(fields.to),
    }
    # Absent means "not requested" for the delivery service; never send "".
    cc = parse_recipients(fields.cc)
    if cc:
        message["cc"] = cc
    bcc = parse_recipients(fields.bcc)
    if bcc:
        message["bcc"] = bcc
    return message


def _add_files(
    additional_info: Dict[str, Any],
    attachments: Sequence[EncodedFile],
    images: Sequence[InlineImage],
) -> None:
    if images:
        additional_info["html_images"] = [
            {"filename": img.filename, "base64": img.data} for img in images
        ]
    if attachments:
        additional_info["attachment_files"] = [
            {"filename": f.name, "base64": f.data} for f in attachments
        ]


def _check_invariants(request: EmailRequest, payload: Dict[str, Any]) -> None:
    message = payload["payload"]
    info = payload["additionalInfo"]
    problems = []
    for key in ("cc", "bcc"):
        if key in message and not message[key]:
            problems.append(f"empty {key}")
    for key in ("html_images", "attachment_files"):
        if key in info and not info[key]:
            problems.append(f"empty {key}")
    if info["isText"] != isinstance(request, TextEmail):
        problems.append("isText does not match mode")
    if info["isText"] and ("html_images" in info or "attachment_files" in info):
        problems.append("files on a text email")
    if problems:
        logger.error("Assembled payload %s is malformed: %s", payload["txnRefNo"], problems)
        raise AssemblyInvariantViolation("; ".join(problems))
