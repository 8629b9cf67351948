"""
Hand-off of a finished review to the next workflow stage.
"""

import json
import logging
from email.message import EmailMessage
from typing import Any, Dict, Optional

import aiosmtplib
import markdown2

from .models import SubmissionPayload
from .render import render_submission_markdown

logger = logging.getLogger(__name__)


class SMTPNotConfigured(RuntimeError):
    pass


def submission_receipt(payload: SubmissionPayload) -> Dict[str, Any]:
    todos = sum(len(p.todos) for p in payload.products)
    logger.info("Submission received: %d products, %d to-dos", len(payload.products), todos)
    logger.debug("Submission payload: %s", json.dumps(payload.to_dict()))
    return {"status": "received", "products": len(payload.products), "todos": todos}


def build_submission_email(payload: SubmissionPayload,
                           to_email: str,
                           subject: str,
                           from_email: str) -> EmailMessage:
    body_markdown = render_submission_markdown(payload)
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = from_email
    msg["To"] = to_email
    msg.set_content(body_markdown)
    msg.add_alternative(markdown2.markdown(body_markdown), subtype="html")
    msg.add_attachment(
        json.dumps(payload.to_dict(), indent=2).encode("utf-8"),
        maintype="application",
        subtype="json",
        filename="submission.json",
    )
    return msg


async def send_submission_email(payload: SubmissionPayload,
                                to_email: str,
                                cfg: Optional[Dict[str, Any]],
                                subject: str = "SEO/GEO Review Submission",
                                from_email: Optional[str] = None) -> None:
    if not cfg:
        raise SMTPNotConfigured("SMTP settings not configured")
    msg = build_submission_email(payload, to_email, subject, from_email or cfg["from_email"])
    await aiosmtplib.send(
        msg,
        hostname=cfg["host"],
        port=cfg["port"],
        start_tls=True,
        username=cfg["username"],
        password=cfg["password"],
    )
    logger.info("Submission emailed to %s", to_email)
