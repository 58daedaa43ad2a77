"""Client for the remote email delivery service."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

import requests

from .config import Settings
from .errors import TransmissionError

logger = logging.getLogger(__name__)


def render_payload(payload: Dict[str, Any]) -> str:
    """Pretty JSON preview of a payload, as sent on the wire."""
    return json.dumps(payload, indent=4)


class EmailClient:
    """POST assembled payloads to <base-url>/api/email/send."""

    SEND_PATH = "/api/email/send"

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.session = requests.Session()
        self.base_url = settings.api_base_url
        self.timeout = settings.email_api_timeout

    def send(self, payload: Dict[str, Any]) -> dict | str:
        """Send a payload and return the service's response body."""
        url = f"{self.base_url}{self.SEND_PATH}"
        txn_ref_no = payload.get("txnRefNo")
        logger.info("Sending email %s to %s", txn_ref_no, url)
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Email service request failed for %s: %s", txn_ref_no, exc)
            raise TransmissionError(str(exc)) from exc

        body = self._parse_response_body(response)
        if response.status_code >= 400:
            logger.error(
                "Email service rejected %s (%s): %s", txn_ref_no, response.status_code, response.text
            )
            try:
                response.raise_for_status()
            except requests.HTTPError as exc:
                raise TransmissionError(
                    self._extract_message(body) or str(exc), status_code=response.status_code
                ) from exc
        logger.debug("Email service response: %s", body)
        return body

    def close(self) -> None:
        self.session.close()

    @staticmethod
    def _parse_response_body(response) -> dict | str:
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _extract_message(body) -> str | None:
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return None
