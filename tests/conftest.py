import pytest

from mailcompose.config import Settings
from mailcompose.models import CandidateFile, EmailFields

MB = 1024 * 1024


@pytest.fixture
def settings(monkeypatch):
    for name in (
        "EMAIL_API_TIMEOUT",
        "EMAIL_SOURCE",
        "EMAIL_TEMPLATE_ID",
        "MAX_TOTAL_ATTACHMENT_SIZE",
        "ACCEPTED_ATTACHMENT_TYPES",
    ):
        monkeypatch.delenv(name, raising=False)
    return Settings(EMAIL_API_BASE_URL="https://mail.example.com/", EMAIL_API_TIMEOUT="5")


@pytest.fixture
def fields():
    return EmailFields(
        source="QR-test",
        from_address="sender@example.com",
        subject="Quarterly update",
        to="a@x.com; b@x.com ,, c@x.com",
    )


def make_candidate(name="report.pdf", content=b"%PDF-1.4 test", content_type="application/pdf"):
    return CandidateFile.from_bytes(name, content, content_type)


def sized_candidate(name, size, content_type="application/pdf"):
    """Candidate declaring `size` bytes with matching zero-filled content."""
    return CandidateFile.from_bytes(name, bytes(size), content_type)
