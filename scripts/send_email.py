"""Entry point that composes an email request and sends it to the delivery service."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from dotenv import load_dotenv

# Ensure project root is on sys.path when running as a script
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mailcompose.compose import ComposeFlow
from mailcompose.config import Settings
from mailcompose.email_client import render_payload
from mailcompose.errors import TransmissionError
from mailcompose.models import (
    AutoGenerateEmail,
    CandidateFile,
    EmailFields,
    EmailMode,
    EmailRequest,
    HtmlEmail,
    Rejection,
    TextEmail,
)
from mailcompose.utils import parse_rename_args

load_dotenv()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compose an email and send it to the delivery service.")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in EmailMode],
        default=EmailMode.HTML.value,
        help="text, html or auto-generate (default: html)",
    )
    parser.add_argument("--source", help="Source tag (default: EMAIL_SOURCE)")
    parser.add_argument("--template-id", type=int, help="Template id (default: EMAIL_TEMPLATE_ID)")
    parser.add_argument("--from", dest="from_address", required=True, help="Sender address")
    parser.add_argument("--to", required=True, help="Recipients, separated by commas or semicolons")
    parser.add_argument("--cc", default="", help="CC recipients")
    parser.add_argument("--bcc", default="", help="BCC recipients")
    parser.add_argument("--subject", required=True)

    body = parser.add_argument_group("body")
    body.add_argument("--text", default="", help="Plain text body (text mode)")
    body.add_argument("--text-file", type=Path, help="Read the plain text body from a file")
    body.add_argument("--html", default="", help="HTML body (text and html modes)")
    body.add_argument("--html-file", type=Path, help="Read the HTML body from a file")
    body.add_argument("--prompt", default="", help="Description of the email (auto-generate mode)")

    files = parser.add_argument_group("files")
    files.add_argument("--attach", type=Path, nargs="+", default=[], help="Attachment files")
    files.add_argument("--image", type=Path, nargs="+", default=[], help="Inline images")
    files.add_argument(
        "--rename-attachment", nargs="+", metavar="INDEX=NAME", help="Rename attachments after upload"
    )
    files.add_argument(
        "--rename-image", nargs="+", metavar="INDEX=NAME", help="Rename inline images after upload"
    )

    parser.add_argument("--dry-run", action="store_true", help="Print the payload without sending it")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def build_request(args: argparse.Namespace, settings: Settings) -> EmailRequest:
    fields = EmailFields(
        source=args.source or settings.default_source,
        from_address=args.from_address,
        subject=args.subject,
        to=args.to,
        cc=args.cc,
        bcc=args.bcc,
        template_id=args.template_id if args.template_id is not None else settings.default_template_id,
    )
    text_body = args.text_file.read_text(encoding="utf-8") if args.text_file else args.text
    html_body = args.html_file.read_text(encoding="utf-8") if args.html_file else args.html

    mode = EmailMode(args.mode)
    if mode is EmailMode.TEXT:
        return TextEmail(fields, text_body=text_body, html_body=html_body)
    if mode is EmailMode.AUTO_GENERATE:
        return AutoGenerateEmail(fields, prompt=args.prompt)
    return HtmlEmail(fields, html_body=html_body)


def candidates_from(paths: list[Path]) -> tuple[list[CandidateFile], list[str]]:
    candidates: list[CandidateFile] = []
    missing: list[str] = []
    for path in paths:
        try:
            candidates.append(CandidateFile.from_path(path))
        except OSError as exc:
            missing.append(f"{path}: {exc.strerror or exc}")
    return candidates, missing


def report(rejections: list[Rejection]) -> None:
    for rejection in rejections:
        print(f"{rejection.title}: {rejection.description}", file=sys.stderr)


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    settings = Settings()
    configure_logging(settings.log_level)

    if not args.to.strip() or not args.subject.strip():
        parser.error("--to and --subject must not be empty")

    try:
        attachment_renames = parse_rename_args(args.rename_attachment)
        image_renames = parse_rename_args(args.rename_image)
    except ValueError as exc:
        parser.error(str(exc))

    request = build_request(args, settings)

    with ComposeFlow(settings) as flow:
        attachments, missing = candidates_from(args.attach)
        images, missing_images = candidates_from(args.image)
        for problem in missing + missing_images:
            print(f"File Upload Error: {problem}", file=sys.stderr)

        report(flow.attachments.ingest(attachments))
        report(flow.images.ingest(images))

        try:
            for index, name in attachment_renames:
                flow.attachments.rename(index, name)
            for index, name in image_renames:
                flow.images.rename(index, name)
        except IndexError:
            parser.error("rename index out of range")

        payload = flow.build(request)
        if args.dry_run:
            print(render_payload(payload))
            return

        try:
            result = flow.send_payload(payload)
        except TransmissionError as exc:
            logging.error("Failed to send email %s: %s", payload["txnRefNo"], exc.message)
            raise SystemExit(1) from exc

    logging.info("Run complete: txnRefNo=%s", result.txn_ref_no)
    print(result.message)


if __name__ == "__main__":
    main()
