"""
Compose flow tests: session lifetime around build, preview and send.
"""

import json
from unittest.mock import MagicMock

import pytest

from mailcompose.compose import ComposeFlow, SendResult
from mailcompose.email_client import EmailClient
from mailcompose.errors import TransmissionError
from mailcompose.models import HtmlEmail, TextEmail

from conftest import MB, make_candidate


@pytest.fixture
def client():
    return MagicMock(spec=EmailClient)


@pytest.fixture
def flow(settings, client):
    return ComposeFlow(settings, client=client)


class TestComposeFlow:
    def test_session_uses_configured_cap(self, flow):
        assert flow.session.budget.cap == 15 * MB

    def test_configured_allow_list(self, settings, client):
        settings.accepted_attachment_types_raw = "text/csv"
        flow = ComposeFlow(settings, client=client)
        rejections = flow.attachments.ingest([make_candidate()])
        assert len(rejections) == 1

    def test_preview_is_pretty_json(self, flow, fields):
        flow.attachments.ingest([make_candidate()])
        preview = flow.preview(HtmlEmail(fields, html_body="<p>x</p>"))

        parsed = json.loads(preview)
        assert parsed["additionalInfo"]["attachment_files"][0]["filename"] == "report.pdf"
        assert '\n    "source"' in preview

    def test_successful_send_clears_session(self, flow, client, fields):
        client.send.return_value = {"message": "queued"}
        flow.attachments.ingest([make_candidate()])
        flow.images.ingest([make_candidate(name="header.png", content_type="image/png")])

        result = flow.send(HtmlEmail(fields))

        sent = client.send.call_args[0][0]
        assert "attachment_files" in sent["additionalInfo"]
        assert result.txn_ref_no == sent["txnRefNo"]
        assert result.message == "Email has been sent successfully. queued"
        assert flow.session.attachments == []
        assert flow.session.images == []
        assert flow.session.budget.total == 0

    def test_failed_send_keeps_session(self, flow, client, fields):
        client.send.side_effect = TransmissionError("Invalid recipient", status_code=400)
        flow.attachments.ingest([make_candidate()])

        with pytest.raises(TransmissionError):
            flow.send(HtmlEmail(fields))

        assert len(flow.session.attachments) == 1
        assert flow.session.budget.total > 0

    def test_text_mode_keeps_files_in_session(self, flow, client, fields):
        client.send.return_value = {}
        flow.attachments.ingest([make_candidate()])
        payload = flow.build(TextEmail(fields, text_body="hi"))

        assert "attachment_files" not in payload["additionalInfo"]
        assert len(flow.session.attachments) == 1

    def test_send_payload_reuses_previewed_payload(self, flow, client, fields):
        client.send.return_value = "ok"
        payload = flow.build(HtmlEmail(fields))

        result = flow.send_payload(payload)

        client.send.assert_called_once_with(payload)
        assert result.txn_ref_no == payload["txnRefNo"]
        assert result.message == "Email has been sent successfully."

    def test_context_manager_resets_and_closes(self, settings, client):
        with ComposeFlow(settings, client=client) as flow:
            flow.attachments.ingest([make_candidate()])
        assert flow.session.attachments == []
        client.close.assert_called_once()


def test_send_result_without_message():
    assert SendResult(txn_ref_no="Email-1", response={}).message == "Email has been sent successfully."
