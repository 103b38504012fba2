"""Transactional email sent by the account flows."""

from __future__ import annotations

import html
from typing import Callable

from accounts.core.config import Settings
from accounts.core.mailer import send_email

VERIFICATION_SUBJECT = "Confirm your email address"


class NotificationService:
    """Builds messages and hands them to the mailer.

    Delivery is best-effort: methods return whether the mailer accepted the
    message and never raise for transport failures.
    """

    def __init__(self, settings: Settings, sender: Callable[..., bool] = send_email) -> None:
        self.settings = settings
        self._send = sender

    def verification_email(self, to_email: str, first_name: str, link: str) -> bool:
        name = html.escape(first_name or "there")
        safe_link = html.escape(link, quote=True)
        html_body = f"""
        <p>Hi {name},</p>
        <p>Thanks for registering your business. Please confirm your email address:</p>
        <p><a href="{safe_link}" style="background:#0ea5e9;color:#fff;padding:12px 18px;border-radius:8px;text-decoration:none;">Confirm my email</a></p>
        <p>If the button does not work, copy this link into your browser:</p>
        <p><a href="{safe_link}">{safe_link}</a></p>
        <p>This link expires in 2 days.</p>
        """
        text_body = f"Hi {first_name or 'there'}, confirm your email address: {link}"
        return self._send(self.settings, VERIFICATION_SUBJECT, to_email, html_body, text_body)
