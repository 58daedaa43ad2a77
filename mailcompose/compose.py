"""One compose flow: a session, its ingestors, and the send/reset lifecycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .assembler import assemble
from .attachments import AttachmentIngestor
from .config import Settings
from .email_client import EmailClient, render_payload
from .inline_images import InlineImageRegistry
from .models import EmailRequest
from .session import IngestionSession

logger = logging.getLogger(__name__)


@dataclass
class SendResult:
    txn_ref_no: str
    response: dict | str

    @property
    def message(self) -> str:
        detail = self.response.get("message") if isinstance(self.response, dict) else None
        return f"Email has been sent successfully. {detail or ''}".rstrip()


class ComposeFlow:
    """Owns the session for the lifetime of one compose flow.

    A successful send clears the session; a failed send keeps every file so
    the operator can retry.
    """

    def __init__(self, settings: Settings, client: Optional[EmailClient] = None) -> None:
        self.settings = settings
        self.session = IngestionSession.with_cap(settings.max_total_attachment_size)
        self.attachments = AttachmentIngestor(
            self.session, accepted_types=settings.accepted_attachment_types or None
        )
        self.images = InlineImageRegistry(self.session)
        self.client = client if client is not None else EmailClient(settings)

    def __enter__(self) -> "ComposeFlow":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.reset()
        self.client.close()

    def build(self, request: EmailRequest) -> Dict[str, Any]:
        return assemble(request, self.session.attachments, self.session.images)

    def preview(self, request: EmailRequest) -> str:
        return render_payload(self.build(request))

    def send(self, request: EmailRequest) -> SendResult:
        return self.send_payload(self.build(request))

    def send_payload(self, payload: Dict[str, Any]) -> SendResult:
        """Send a payload already built (and possibly previewed) by this flow."""
        response = self.client.send(payload)
        result = SendResult(txn_ref_no=payload["txnRefNo"], response=response)
        logger.info("Email %s accepted by delivery service", result.txn_ref_no)
        self.reset()
        return result

    def reset(self) -> None:
        self.session.clear()
